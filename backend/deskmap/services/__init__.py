"""
DeskMap - Services
"""
