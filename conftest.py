import os
import sys
from datetime import datetime

import pytest

# Add the backend directory to the path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from flood_engine.assessment import build_location_context
from flood_engine.models import HydrologyFlag, LocationSampleSet, PlaceIdentity, SamplePoint

ISSUED_AT = datetime(2026, 1, 1, 9, 5)


def make_samples(center_elev, ring=(), hourly=(), rate=0.0, wind=None, code=63):
    center = SamplePoint(7.2906, 80.6337, center_elev, rate, tuple(hourly), code, wind, 24.0)
    neighbors = tuple(SamplePoint(7.2906, 80.6337, e) for e in ring)
    return LocationSampleSet(center, neighbors)


@pytest.fixture
def sample_factory():
    return make_samples


@pytest.fixture
def valley_context():
    # 10 m center in a 40 m ring, 120 mm over the window, river within 2 km
    samples = make_samples(10, [30, 40, 50, 40], hourly=[5.0] * 24, rate=4.0, wind=18.0)
    return build_location_context(
        7.2906, 80.6337, samples, HydrologyFlag.DETECTED,
        PlaceIdentity("Kandy", "Central Province"), ISSUED_AT,
    )


@pytest.fixture
def plain_context():
    samples = make_samples(100, [110, 90, 105, 95], hourly=[0.5] * 10, rate=1.0)
    return build_location_context(
        52.52, 13.40, samples, HydrologyFlag.NONE,
        PlaceIdentity("Berlin", "Berlin"), ISSUED_AT,
    )
