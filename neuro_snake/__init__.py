"""
Neuro-Snake: Neuroevolution of Feed-Forward Controllers for Grid Snake Agents

A population of small fixed-topology networks, each steering one snake,
improved generation by generation through selection and mutation alone.
"""

__version__ = "0.1.0"
