"""CLI package.

The ``cli`` sub-package contains the Click application and all
command implementations. It should import only from the public
subpackages (``jastx.ast``, ``jastx.renderer``, ``jastx.validator``,
``jastx.taxonomy``), never from their internal modules.
"""
from __future__ import annotations
