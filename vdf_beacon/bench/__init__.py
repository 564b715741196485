"""Timing benchmarks for the VDF core (run as ``python -m vdf_beacon.bench.<name>``)."""
