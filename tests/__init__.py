"""
bmfont test suite
"""
