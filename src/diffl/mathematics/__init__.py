"""Left finite differences and their adjoints, both as functions acting on arrays and
as matrix-free linear operators acting on flat vectors.

"""
