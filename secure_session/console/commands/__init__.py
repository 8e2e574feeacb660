"""
Built-in Commands
"""
