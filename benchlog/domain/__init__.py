"""
Domain Package

Benchmark records, the log parser, the run comparator and run-set
utilities.
"""
