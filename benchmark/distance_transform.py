import torch
import torch.utils.benchmark as benchmark
import scipy.ndimage as ndi
from prettytable import PrettyTable
import torchedt as tm

sizes = [16, 32, 64, 128]
densities = [0.001, 0.01, 0.1]
device = "cuda" if torch.cuda.is_available() else "cpu"
MIN_RUN = 1.0  # seconds per measurement

torch.set_num_threads(torch.get_num_threads())

for p in densities:
    table = PrettyTable()
    table.field_names = [
        "Size",
        "SciPy (ms/vol)",
        "torchedt float (ms/vol)",
        "torchedt short (ms/vol)",
        "Speedup float",
        "Speedup short",
    ]
    for c in table.field_names:
        table.align[c] = "r"

    for s in sizes:
        # Inputs, True = foreground
        x = torch.rand(s, s, s, device=device) < p
        x[0, 0, 0] = True
        x_np = (~x).cpu().numpy()

        # SciPy (CPU), distance from non-zero voxels to the nearest zero voxel
        t_scipy = benchmark.Timer(
            stmt="ndi.distance_transform_edt(x_np)",
            setup="from __main__ import x_np, ndi",
            num_threads=torch.get_num_threads(),
        ).blocked_autorange(min_run_time=MIN_RUN)
        scipy_ms = t_scipy.median * 1e3

        t_float = benchmark.Timer(
            stmt="tm.distance_transform(x, repn='float')",
            setup="from __main__ import x, tm",
            num_threads=torch.get_num_threads(),
        ).blocked_autorange(min_run_time=MIN_RUN)
        float_ms = t_float.median * 1e3

        t_short = benchmark.Timer(
            stmt="tm.distance_transform(x, repn='short')",
            setup="from __main__ import x, tm",
            num_threads=torch.get_num_threads(),
        ).blocked_autorange(min_run_time=MIN_RUN)
        short_ms = t_short.median * 1e3

        table.add_row([
            s,
            f"{scipy_ms:.3f}",
            f"{float_ms:.3f}",
            f"{short_ms:.3f}",
            f"{scipy_ms / float_ms:.2f}×",
            f"{scipy_ms / short_ms:.2f}×",
        ])

    print(f"\n=== Foreground density: {p} ({device}) ===")
    print(table)
