# -*- coding: utf-8 -*-
"""Workspace-oriented project picker for tmux sessions.

Scan your workspaces for git repositories, pick one and land in a tmux
session named after it. `wsm` creates the session when it's missing and
attaches to it otherwise.
"""
__package__ = 'wsm'
__license__ = 'MIT'
__version__ = '0.1.0'
__author__ = __maintainer__ = 'Rafael Bodill'
__email__ = 'justrafi@gmail'
