"""
Core: curve snapshots, u64 integer math, the Pricing Engine and JSON contracts.

Nothing here performs I/O; everything is driven by values passed in.
"""
