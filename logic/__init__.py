"""logic — Simulation systems package.

Subpackages
-----------
brains/     — brain registry, decision runner, autonomous / patrol /
              wander / idle brains

Top-level modules
-----------------
tick            — per-frame system orchestrator
entity_factory  — NPC and item creation
needs           — need decay, satisfaction, urgency
items           — functional item use
movement        — tile-to-tile walking
social          — relationships and conversations
"""
