"""Taskboard: an in-memory task tracker served over a small HTTP CRUD API."""

__version__ = "0.1.0"
