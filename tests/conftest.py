"""Pytest configuration and shared fixtures for all tests."""

import json

import pytest

from depnorm.config import ParseOptions
from depnorm.models import ManifestNameSets


@pytest.fixture
def default_options():
    """Options with direct dependencies only."""
    return ParseOptions()


@pytest.fixture
def transitive_options():
    """Options that include transitive dependencies."""
    return ParseOptions(include_transitive=True)


@pytest.fixture
def express_name_sets():
    """package.json name sets declaring express as the only dependency."""
    return ManifestNameSets(prod={"express"})


@pytest.fixture
def package_lock_v3():
    """package-lock.json with one direct and two nested packages."""
    return json.dumps(
        {
            "name": "test-project",
            "version": "1.0.0",
            "lockfileVersion": 3,
            "packages": {
                "": {"name": "test-project", "version": "1.0.0"},
                "node_modules/express": {"version": "4.18.2"},
                "node_modules/express/node_modules/accepts": {"version": "1.3.8"},
                "node_modules/express/node_modules/body-parser": {"version": "1.20.2"},
            },
        }
    ).encode()


@pytest.fixture
def gemfile_lock_content():
    return b"""GEM
  remote: https://rubygems.org/
  specs:
    actionpack (7.1.0)
      rack (>= 2.2.4)
    pg (1.5.4)
    rack (3.0.8)
    rails (7.1.0)
      actionpack (= 7.1.0)

PLATFORMS
  ruby
  x86_64-linux

DEPENDENCIES
  pg (~> 1.1)
  rails (~> 7.1)

BUNDLED WITH
   2.4.10
"""
