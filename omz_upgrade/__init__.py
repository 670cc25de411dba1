"""
omz-upgrade: self-update routine for an Oh My Zsh installation.
"""
