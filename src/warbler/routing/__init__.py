"""Routing — compiled route table with O(path-depth) matching.

Page routes are registered while pages are mounted and compiled into an
immutable lookup structure when the app freezes.
"""
