"""Stimulus simulation for topicflow topologies."""

from .sim import ISim, Sim

__all__ = ["ISim", "Sim"]
