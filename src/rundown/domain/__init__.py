"""
Domain layer - rundown, cue and runner entities.

Entities are immutable snapshots handed to the runtime layer. They are
built from rundown storage payloads via their ``from_dict`` constructors.
"""
