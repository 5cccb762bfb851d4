"""
Runtime layer - the timestamp engine and the calendar math it relies on.

Modules here are pure: every function is a deterministic function of its
arguments and never mutates the snapshots it is given.
"""
