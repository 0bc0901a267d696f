"""
SPS Policy Store
================
Django app persisting storage policy properties.
"""
