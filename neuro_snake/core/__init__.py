"""
Core components of the neuro-snake system.

- agent: The SnakeAgent - body, heading, movement
"""

from .agent import SnakeAgent, AgentStatus, Direction

__all__ = ["SnakeAgent", "AgentStatus", "Direction"]
