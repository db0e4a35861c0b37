"""
Unit Tests for the Lithium-Ion Cell Simulator

This package contains unit tests for:
- Calibration tables and bilinear interpolation
- Cell electrical and thermal updates
- Current profiles and the simulation loop
- Scenario files, logging setup and the command line driver
"""
