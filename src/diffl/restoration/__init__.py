"""Restoration routines built on top of the left finite difference operators, most
prominently total variation regularization and denoising.

"""
