"""Tenant screening orchestration and match scoring."""

__version__ = "0.1.0"
