"""
Achievement detection: diffs a pre- and post-mutation progress snapshot.

Modules
-------
definitions : CUISINE_GOALS goal table, streak and speed milestone tables,
              deterministic achievement id builders.
detector    : detect() + per-family detectors + filter_unlocked().
"""
