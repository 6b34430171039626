"""Team formation engine.

Sub-modules:
- fit_scoring       – greedy fit score of one candidate against a team
- partition_builder – randomized greedy construction of one partition
- quality           – multi-factor quality score of a whole partition
- selection         – best-partition selection among attempts
- statistics        – per-team and club-wide composition counts
"""
