"""Shared fixtures: small catalogs built in memory."""

from __future__ import annotations

import pytest

from star_quiz.catalog import StarCatalog, StarRecord


@pytest.fixture
def bright_four() -> StarCatalog:
    """Sirius, Canopus, Vega, Polaris (ids 1-4)."""
    return StarCatalog(
        [
            StarRecord(id=1, name='Sirius', ra=6.75, dec=-16.7, mag=-1.46, constellation='CMa'),
            StarRecord(id=2, name='Canopus', ra=6.4, dec=-52.7, mag=-0.74, constellation='Car'),
            StarRecord(id=3, name='Vega', ra=18.6, dec=38.8, mag=0.03, constellation='Lyr'),
            StarRecord(id=4, name='Polaris', ra=2.53, dec=89.3, mag=1.98, constellation='UMi'),
        ]
    )
