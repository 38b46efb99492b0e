"""
Performance Tests.

Benchmarks for Sample Extractor on generated extractions:
    - 50k customers / 300k items < 10 seconds
    - Early termination reads only the needed customer prefix
"""
