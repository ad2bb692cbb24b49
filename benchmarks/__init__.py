"""Performance benchmarks for qlift.

This package contains microbenchmarks for hot paths in the library:
gate application on dense registers and repeated measurement.
"""
