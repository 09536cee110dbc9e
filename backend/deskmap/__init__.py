"""
DeskMap - Office directory and floor-plan locator API
"""
