"""
Services for file access and persisted settings.
"""
