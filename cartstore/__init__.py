"""
Cart persistence layer with latency-based replica selection.
"""
