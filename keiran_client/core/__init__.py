"""
Core.

Configuration, logging and exceptions shared by every command.
"""
