from setuptools import setup, find_packages


setup(
    name="torchedt",
    version="0.1.0",
    author="Kai Zhao",
    description="3D Euclidean distance transform of binary volumes for PyTorch",
    packages=find_packages(exclude=("test", "benchmark")),
    python_requires=">=3.8",
    install_requires=["torch>=1.13"],
    extras_require={
        "test": ["pytest", "numpy", "scipy"],
        "benchmark": ["scipy", "prettytable"],
    },
    include_package_data=True,
    zip_safe=False,
)
