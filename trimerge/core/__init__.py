"""
Core merge logic, independent of file I/O and the command line.
"""
