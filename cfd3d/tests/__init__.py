"""
Tests for the 3D compressible flow solver.

Run tests with pytest:
    pytest cfd3d/tests/ -v

Or run individual test files:
    pytest cfd3d/tests/test_characteristics.py -v
    pytest cfd3d/tests/test_shock_tube.py -v
"""
