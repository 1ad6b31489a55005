from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List, Sequence, Set, Tuple

from .interface import Dispatchable, MatchOutcome

if TYPE_CHECKING:  # pragma: no cover - import cycle safe typing
    from fleet.request import Request


class CostMatcher:
    """Matches hall calls to the car with the lowest time-to-serve estimate.

    Every pending request is re-scored against every car on each pass. Ties
    go to the car that comes first in fleet order. A zero estimate fulfils
    the request and holds the car for boarding; otherwise an idle winner that
    has not moved yet this tick is nudged one floor towards the call.
    """

    def match(
        self,
        cars: Sequence[Dispatchable],
        requests: Iterable["Request"],
        moved: Set[int],
    ) -> MatchOutcome:
        outcome = MatchOutcome()
        for request in list(requests):
            car, cost = self.best_car(cars, request)
            if cost == 0:
                self._fulfil(car, request, outcome)
                continue
            if car.is_idle and car.car_id not in moved and car.move_closer(request.floor):
                moved.add(car.car_id)
                outcome.nudged.append((car.car_id, request.floor))
                # the nudge may have brought the car onto the calling floor
                if car.estimate(request.floor, request.direction) == 0:
                    self._fulfil(car, request, outcome)
                    continue
            outcome.pending.append(request)
        return outcome

    def best_car(
        self, cars: Sequence[Dispatchable], request: "Request"
    ) -> Tuple[Dispatchable, int]:
        costs: List[Tuple[Dispatchable, int]] = [
            (car, car.estimate(request.floor, request.direction)) for car in cars
        ]
        # min() keeps the first of equal costs, i.e. fleet order
        return min(costs, key=lambda pair: pair[1])

    def _fulfil(self, car: Dispatchable, request: "Request", outcome: MatchOutcome) -> None:
        car.hold()
        outcome.fulfilled.append((request, car.car_id))
