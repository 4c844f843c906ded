"""Primary public API for TangleSmith."""

from __future__ import annotations

from tanglesmith.api import TangleResult, TangleSettings, tangle_document, tangle_file
from tanglesmith.core.config import TangleConfig, load_config
from tanglesmith.core.diagnostics import (
    DiagnosticEmitter,
    LoggingEmitter,
    NullEmitter,
)
from tanglesmith.core.exceptions import (
    AmbiguousLabelError,
    ConfigError,
    CyclicReferenceError,
    DoubleInitError,
    DuplicateRootError,
    ExpansionDepthError,
    NoRootError,
    RegistryFrozenError,
    TangleError,
    UninitializedAppendError,
    UnknownLabelError,
    UnterminatedFragmentError,
)
from tanglesmith.core.labels import matching_labels, resolve_label
from tanglesmith.core.registry import Fragment, FragmentRegistry
from tanglesmith.core.scanner import BlockOperator, DocumentScanner, TaggedBlock, scan_blocks
from tanglesmith.core.tangler import Tangler, build_registry, tangle_text
from tanglesmith.version import get_version


__version__ = get_version()

__all__ = [
    "AmbiguousLabelError",
    "BlockOperator",
    "ConfigError",
    "CyclicReferenceError",
    "DiagnosticEmitter",
    "DocumentScanner",
    "DoubleInitError",
    "DuplicateRootError",
    "ExpansionDepthError",
    "Fragment",
    "FragmentRegistry",
    "LoggingEmitter",
    "NoRootError",
    "NullEmitter",
    "RegistryFrozenError",
    "TaggedBlock",
    "TangleConfig",
    "TangleError",
    "TangleResult",
    "TangleSettings",
    "Tangler",
    "UninitializedAppendError",
    "UnknownLabelError",
    "UnterminatedFragmentError",
    "__version__",
    "build_registry",
    "load_config",
    "matching_labels",
    "resolve_label",
    "scan_blocks",
    "tangle_document",
    "tangle_file",
    "tangle_text",
]
