"""
Studies: Structured experiments for understanding.

Each study begins with observation, not hypothesis.

Study progression:
1. Evolution - watch survival time climb generation by generation
"""
