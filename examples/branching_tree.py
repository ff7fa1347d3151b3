import logging

import numpy as np

from neurite_paths import Path, PathSet, SWCType, set_log_level

logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
set_log_level("INFO")

rng = np.random.default_rng(7)

# Trunk: a noisy 40-node trace along x, 0.25 um voxels in z
t = np.linspace(0.0, 40.0, 40)
trunk_xyz = np.column_stack([t, 0.3 * rng.standard_normal(40), np.zeros(40)])

paths = PathSet()
trunk = Path.from_points(trunk_xyz, spacing=(0.1, 0.1, 0.25), radii=np.full(40, 1.5))
trunk.set_swc_type(SWCType.DENDRITE)
paths.add(trunk)

# Two branches starting on nodes 12 and 30 of the trunk
for anchor in (12, 30):
    start = trunk.xyz[anchor]
    steps = np.column_stack([np.zeros(15), np.linspace(0.0, 15.0, 15), np.zeros(15)])
    branch = Path.from_points(start + steps, spacing=(0.1, 0.1, 0.25))
    paths.add(branch)
    branch.set_start_join(trunk, trunk.point(anchor))

for path in paths:
    print(f"{path}: order={path.order} length={path.real_length_string()}")

print(f"Trunk volume before: {trunk.approximate_volume():.1f}")
trunk.downsample(0.5)
print(f"Trunk nodes after downsampling: {trunk.size}")
print(f"Trunk volume after:  {trunk.approximate_volume():.1f}")

for root in paths.build_tree():
    print(root, "->", [str(child) for child in root.children])
