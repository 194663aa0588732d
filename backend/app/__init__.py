"""
Emotion frames backend application package
"""
