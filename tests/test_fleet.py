import pytest

from fleet import BOARDING_TIME, Direction, FleetScheduler, NotFoundError, RangeError, Request
from fleet.log import CollectingSink


def positions(fleet):
    return [(car.current_floor, car.travel_direction) for car in fleet.cars]


@pytest.mark.parametrize("floor_count, car_count", [(0, 1), (10, 0), (-1, -1)])
def test_constructor_rejects_invalid_sizes(floor_count, car_count):
    with pytest.raises(RangeError):
        FleetScheduler(floor_count, car_count)


def test_cars_are_numbered_in_fleet_order():
    fleet = FleetScheduler(10, 3)
    assert [car.car_id for car in fleet.cars] == [1, 2, 3]
    assert all(car.current_floor == 1 for car in fleet.cars)
    assert fleet.time == 0


def test_request_call_is_queued_not_assigned():
    fleet = FleetScheduler(10, 2)
    request = fleet.request_call(5, "up")
    assert request == Request(5, Direction.UP)
    assert fleet.requests == [Request(5, Direction.UP)]
    assert all(car.is_idle for car in fleet.cars)


@pytest.mark.parametrize("floor", [0, 11])
def test_request_call_out_of_range_leaves_state(floor):
    fleet = FleetScheduler(10, 2)
    fleet.request_call(4, Direction.DOWN)
    with pytest.raises(RangeError):
        fleet.request_call(floor, Direction.UP)
    assert fleet.requests == [Request(4, Direction.DOWN)]


def test_request_call_rejects_unknown_direction():
    fleet = FleetScheduler(10, 1)
    with pytest.raises(ValueError):
        fleet.request_call(4, "sideways")
    assert fleet.requests == []


def test_assign_floor_unknown_car():
    fleet = FleetScheduler(10, 2)
    with pytest.raises(NotFoundError):
        fleet.assign_floor(3, 5)


def test_assign_floor_range_error_propagates():
    fleet = FleetScheduler(10, 2)
    with pytest.raises(RangeError):
        fleet.assign_floor(2, 11)
    assert fleet.car(2).is_idle


def test_assign_floor_bypasses_matching():
    fleet = FleetScheduler(10, 2)
    fleet.assign_floor(2, 7)
    assert fleet.requests == []
    assert fleet.car(2).jobs[Direction.UP] == [7]
    assert fleet.car(2).travel_direction is Direction.UP
    assert fleet.car(1).is_idle


def test_ticking_without_work_changes_nothing():
    fleet = FleetScheduler(10, 3)
    before = positions(fleet)
    fleet.tick(25)
    assert positions(fleet) == before
    assert fleet.time == 25


def test_call_served_on_the_tick_the_car_arrives():
    fleet = FleetScheduler(10, 1)
    car = fleet.car(1)
    fleet.request_call(3, Direction.DOWN)

    fleet.tick()
    assert car.current_floor == 2
    assert fleet.requests == [Request(3, Direction.DOWN)]

    fleet.tick()
    assert car.current_floor == 3
    assert fleet.requests == []
    assert car.boarding_countdown == BOARDING_TIME


def test_hold_pauses_car_before_next_call():
    fleet = FleetScheduler(10, 1)
    car = fleet.car(1)
    fleet.request_call(3, Direction.DOWN)
    fleet.tick(2)
    fleet.request_call(6, Direction.UP)
    for _ in range(BOARDING_TIME):
        fleet.tick()
        assert car.current_floor == 3
    fleet.tick()
    assert car.current_floor == 4


def test_tie_goes_to_first_car():
    fleet = FleetScheduler(10, 2)
    fleet.request_call(5, Direction.UP)
    fleet.tick()
    assert fleet.car(1).current_floor == 2
    assert fleet.car(2).current_floor == 1


def test_closest_car_wins():
    fleet = FleetScheduler(10, 2)
    fleet.assign_floor(2, 8)
    fleet.tick(9)
    assert fleet.car(2).is_idle
    assert fleet.car(2).current_floor == 8
    fleet.request_call(7, Direction.DOWN)
    fleet.tick()
    assert fleet.car(2).current_floor == 7
    assert fleet.car(1).current_floor == 1
    assert fleet.requests == []


def test_only_one_nudge_per_car_per_tick():
    fleet = FleetScheduler(10, 1)
    fleet.request_call(5, Direction.UP)
    fleet.request_call(8, Direction.DOWN)
    fleet.tick()
    assert fleet.car(1).current_floor == 2


def test_moving_car_picks_up_call_on_the_way():
    fleet = FleetScheduler(10, 1)
    car = fleet.car(1)
    fleet.assign_floor(1, 8)
    fleet.request_call(4, Direction.UP)
    fleet.tick(3)
    assert car.current_floor == 4
    assert fleet.requests == []
    assert car.jobs[Direction.UP] == [8]
    for _ in range(BOARDING_TIME):
        fleet.tick()
        assert car.current_floor == 4
    fleet.tick()
    assert car.current_floor == 5


def test_moving_car_passes_call_in_other_direction():
    # known directional mismatch: the car is at floor 4 but sweeping up, so
    # the down call there is only served after the sweep ends
    fleet = FleetScheduler(10, 1)
    car = fleet.car(1)
    served = []
    fleet.on_event("fulfilled", lambda payload: served.append((payload["time"], car.current_floor)))
    fleet.assign_floor(1, 8)
    fleet.request_call(4, Direction.DOWN)
    fleet.tick(3)
    assert car.current_floor == 4
    assert fleet.requests == [Request(4, Direction.DOWN)]

    fleet.tick(20)
    assert fleet.requests == []
    assert len(served) == 1
    assert served[0][1] == 4


def test_queues_stay_sorted_and_floors_in_range():
    fleet = FleetScheduler(6, 2)
    presses = [(1, 5), (2, 3), (1, 2), (2, 6), (1, 6), (2, 1), (1, 1), (2, 4)]
    for car_id, floor in presses:
        fleet.assign_floor(car_id, floor)
        fleet.request_call(floor, Direction.UP if floor < 6 else Direction.DOWN)
        for car in fleet.cars:
            assert car.jobs[Direction.UP] == sorted(car.jobs[Direction.UP])
            assert car.jobs[Direction.DOWN] == sorted(car.jobs[Direction.DOWN], reverse=True)
        fleet.tick(2)
        assert all(1 <= car.current_floor <= 6 for car in fleet.cars)


def test_status_event_every_tick():
    fleet = FleetScheduler(10, 2)
    statuses = []
    fleet.on_event("status", statuses.append)
    fleet.request_call(4, Direction.DOWN)
    fleet.tick(3)
    assert [status.time for status in statuses] == [1, 2, 3]
    assert statuses[0].car_labels == ["1:2·", "2:1·"]
    assert statuses[0].request_labels == ["4:↓"]
    assert statuses[-1].request_labels == []


def test_nudge_event():
    fleet = FleetScheduler(10, 1)
    nudges = []
    fleet.on_event("nudge", nudges.append)
    fleet.request_call(3, Direction.UP)
    fleet.tick()
    assert nudges == [{"car_id": 1, "floor": 3, "time": 1}]


def test_narration_is_prefixed_with_time_and_car():
    sink = CollectingSink()
    fleet = FleetScheduler(10, 1, emit=sink)
    fleet.assign_floor(1, 2)
    fleet.tick()
    assert sink.lines[0].startswith("T0000 Car 1: new job registered")
    assert "T0001 Car 1: moved up to floor 2" in sink.lines
    assert sink.lines[-1] == "T0001 System: current status 1:2↑ pending []"


@pytest.mark.parametrize("floor", [3.5, "3", True, None])
def test_request_call_rejects_non_integer_floor(floor):
    fleet = FleetScheduler(10, 1)
    with pytest.raises(RangeError):
        fleet.request_call(floor, Direction.UP)
    assert fleet.requests == []
