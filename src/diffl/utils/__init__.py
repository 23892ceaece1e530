"""Utilities shared by the difference operators: axis slicing, configuration of the
boundary treatment, exceptions, dtype conversion and linear algebra diagnostics.

"""
