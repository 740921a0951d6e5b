"""Unified command-line interface for tabsplit.

Usage:
    tabsplit parse [file] [--merge [THRESHOLD]] [--pretty] [--rules PATH]
    tabsplit classify <line>
    tabsplit price <text>
    tabsplit similarity <a> <b>
"""
