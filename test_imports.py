#!/usr/bin/env python3
"""
Test that the public imports work after package installation.
"""


def test_imports():
    """Test all main imports from the propstack package."""
    import propstack
    from propstack import ConfigLoader, ConfigResolver, OverlayMerger, ProfileResolver, SourceRegistry
    from propstack.config import (
        MISSING,
        CachingResourceLoader,
        CapabilityRegistry,
        ConfigContext,
        MalformedFileError,
        NotFoundError,
        PropertySet,
        ResourceLoader,
    )
    from propstack.utils import setup_logging, ResolutionLogger
    from propstack.cli import main

    assert propstack.__version__ == "1.0.0"
    assert set(propstack.__all__) >= {"ConfigLoader", "OverlayMerger", "setup_logging"}
