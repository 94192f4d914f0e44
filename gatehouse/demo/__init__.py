"""
Gatehouse demo application.
"""
