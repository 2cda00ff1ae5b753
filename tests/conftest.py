"""
Pytest configuration and shared fixtures for CDES profile toolkit tests.

Provides:
- Sample cannabinoid profiles
- Long-form and wide-form categorical inputs
- Name resolver and analyzer instances
- Configuration files on a temporary path
"""

import copy
from pathlib import Path
from typing import List

import pytest
import yaml

from cdes.analysis.analyzer import ProfileAnalyzer
from cdes.models import Profile
from cdes.normalization.name_resolver import NameResolver
from cdes.utils.config_manager import ConfigManager
from tests.fixtures.profile_helpers import make_profile
from tests.fixtures.test_data import (
    LONG_FORM_MULTI_BATCH,
    LONG_FORM_SINGLE_BATCH,
    WIDE_FORM_SINGLE_BATCH,
)


# ============================================================================
# PROFILE FIXTURES
# ============================================================================

@pytest.fixture(scope="function")
def profile_a() -> Profile:
    """Balanced-leaning THC profile: THC 20, CBD 15, CBN 2."""
    return make_profile('batch1', {'THC': 20, 'CBD': 15, 'CBN': 2}, 'Batch 1')


@pytest.fixture(scope="function")
def profile_b() -> Profile:
    """Near neighbour of profile_a: THC 21, CBD 14, CBN 2.5."""
    return make_profile('batch2', {'THC': 21, 'CBD': 14, 'CBN': 2.5}, 'Batch 2')


@pytest.fixture(scope="function")
def profile_far() -> Profile:
    """Low-potency profile far from profile_a."""
    return make_profile('batch3', {'THC': 5}, 'Batch 3')


@pytest.fixture(scope="function")
def full_panel_profile() -> Profile:
    """Profile reporting all nine known cannabinoids."""
    return make_profile('full', {
        'THC': 18.0, 'CBD': 0.8, 'CBN': 0.3, 'CBG': 1.1, 'CBC': 0.2,
        'THCV': 0.7, 'CBDV': 0.1, 'THCA': 22.5, 'CBDA': 0.4,
    })


@pytest.fixture(scope="function")
def candidate_pool(profile_a, profile_b, profile_far) -> List[Profile]:
    """Target plus near and far candidates."""
    return [profile_a, profile_b, profile_far]


# ============================================================================
# CATEGORICAL INPUT FIXTURES
# ============================================================================

@pytest.fixture(scope="function")
def long_form_input() -> dict:
    """Single batch, one row per compound."""
    return copy.deepcopy(LONG_FORM_SINGLE_BATCH)


@pytest.fixture(scope="function")
def long_form_multi_input() -> dict:
    """Two interleaved batches, one row per compound."""
    return copy.deepcopy(LONG_FORM_MULTI_BATCH)


@pytest.fixture(scope="function")
def wide_form_input() -> dict:
    """Single batch, positional compound columns."""
    return copy.deepcopy(WIDE_FORM_SINGLE_BATCH)


# ============================================================================
# NORMALIZATION / ANALYSIS FIXTURES
# ============================================================================

@pytest.fixture(scope="function")
def name_resolver() -> NameResolver:
    """Fresh resolver over the fixed registry."""
    return NameResolver()


@pytest.fixture(scope="function")
def config_manager() -> ConfigManager:
    """Configuration with defaults only."""
    return ConfigManager()


@pytest.fixture(scope="function")
def analyzer(config_manager) -> ProfileAnalyzer:
    """Analyzer with default configuration."""
    return ProfileAnalyzer(config=config_manager)


# ============================================================================
# CONFIG FILE FIXTURES
# ============================================================================

@pytest.fixture(scope="function")
def config_file(tmp_path) -> Path:
    """YAML config overriding part of the ranking section."""
    path = tmp_path / "analysis_config.yaml"
    with open(path, 'w', encoding='utf-8') as f:
        yaml.safe_dump({'ranking': {'limit': 3, 'decay_scale': 5.0}}, f)
    return path
