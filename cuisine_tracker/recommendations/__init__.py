"""
Recommendation engine: ranks untried cuisines by how well they fit the
user's history, with a seeded exploration term for variety.

Modules
-------
scorer   : ScoreComponents dataclass + build_profile() + score_cuisine()
           + build_reasoning() — pure functions, no I/O.
ranker   : ScoredCuisine dataclass + score_candidates() + predict_next().
"""
