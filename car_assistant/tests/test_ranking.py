import pytest

from car_assistant.recommendations.models import VehicleRecord
from car_assistant.recommendations.ranking import rank_candidates, score_vehicle, search_tags


def _car(id, tags=None, quality=0.0):
    return VehicleRecord(id=id, price=1_000_000, body_type="SUV", fuel_type="Petrol",
                         tags=tags or [], quality_score=quality)


def test_tag_matches_outweigh_quality():
    a = _car("A", tags=["Family-focused"], quality=80)
    b = _car("B", tags=["Family-focused", "Safety"], quality=60)

    ranked = rank_candidates([a, b], [], ["Family-focused", "Safety"])

    assert [r.vehicle.id for r in ranked] == ["B", "A"]
    assert ranked[0].match_score == pytest.approx(26.0)
    assert ranked[1].match_score == pytest.approx(18.0)


def test_score_formula():
    car = _car("x", tags=["Safety", "Comfort", "Sport"], quality=73)
    tags = search_tags(["Sport", "Mixed"], ["Safety"])
    assert score_vehicle(car, tags) == pytest.approx(10 * 2 + 0.1 * 73)


def test_quality_score_breaks_ties():
    low = _car("low", tags=["Safety"], quality=50)
    high = _car("high", tags=["Safety"], quality=90)
    ranked = rank_candidates([low, high], ["Safety"], [])
    assert [r.vehicle.id for r in ranked] == ["high", "low"]


def test_duplicate_tags_across_lists_count_twice():
    car = _car("x", tags=["Safety"])
    assert search_tags(["Safety"], ["Safety"]) == ["Safety", "Safety"]
    ranked = rank_candidates([car], ["Safety"], ["Safety"])
    assert ranked[0].match_score == pytest.approx(20.0)


def test_equal_scores_keep_input_order():
    cars = [_car(str(i), tags=["Comfort"], quality=40) for i in range(5)]
    ranked = rank_candidates(cars, ["Comfort"], [])
    assert [r.vehicle.id for r in ranked] == ["0", "1", "2", "3", "4"]


def test_output_is_non_increasing_and_complete():
    cars = [
        _car("a", tags=["Sport"], quality=10),
        _car("b", tags=[], quality=95),
        _car("c", tags=["Sport", "Performance"], quality=0),
        _car("d", tags=["Performance"], quality=10),
    ]
    ranked = rank_candidates(cars, ["Sport"], ["Performance"])
    scores = [r.match_score for r in ranked]
    assert scores == sorted(scores, reverse=True)
    assert len(ranked) == len(cars)
    assert [r.vehicle.id for r in ranked] == ["c", "a", "d", "b"]


def test_tags_outside_the_taxonomy_are_matched_literally():
    car = _car("x", tags=["Towing"])
    assert rank_candidates([car], ["Towing"], [])[0].match_score == pytest.approx(10.0)
    assert rank_candidates([car], ["towing"], [])[0].match_score == pytest.approx(0.0)


def test_no_tags_ranks_by_quality_only():
    cars = [_car("a", quality=10), _car("b", quality=30)]
    ranked = rank_candidates(cars, None, None)
    assert [r.vehicle.id for r in ranked] == ["b", "a"]
    assert ranked[0].match_score == pytest.approx(3.0)


def test_empty_candidates():
    assert rank_candidates([], ["Safety"], []) == []
