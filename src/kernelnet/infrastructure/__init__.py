"""
NumPy-backed implementations of the kernelnet contracts.
"""
