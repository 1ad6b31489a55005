from __future__ import annotations

import argparse
import asyncio
import contextlib
import json
import logging
from typing import List, Optional, Set

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from fleet import Direction, FleetConfig, FleetScheduler, FleetState, NotFoundError, RangeError
from fleet.log import logging_sink

logger = logging.getLogger("sweeplift")


class TickRequest(BaseModel):
    ticks: int = Field(default=1, ge=1)


class CallRequest(BaseModel):
    floor: int
    direction: str


class PressRequest(BaseModel):
    floor: int


class CarEntry(BaseModel):
    id: int
    floor: int


class RequestEntry(BaseModel):
    floor: int
    direction: str


class Snapshot(BaseModel):
    floor_count: int
    time: int = 0
    requests: List[RequestEntry] = []
    cars: List[CarEntry] = []


class FleetManager:
    def __init__(self, config: Optional[FleetConfig] = None, tick_interval: Optional[float] = None) -> None:
        self.config = config or FleetConfig()
        self.fleet = self.config.build(emit=logging_sink(logger))
        self.tick_interval = tick_interval
        self.clients: Set[WebSocket] = set()
        self._task: Optional[asyncio.Task] = None
        self._lock = asyncio.Lock()

    async def start(self) -> None:
        if self._task is None and self.tick_interval:
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None

    async def _run(self) -> None:
        while True:
            async with self._lock:
                self.fleet.tick()
                payload = self.current_state()
            await self.broadcast(payload)
            await asyncio.sleep(self.tick_interval)

    async def broadcast(self, payload: dict) -> None:
        message = json.dumps(payload)
        disconnected: Set[WebSocket] = set()
        for client in set(self.clients):
            try:
                await client.send_text(message)
            except WebSocketDisconnect:
                disconnected.add(client)
        for client in disconnected:
            await self.unregister(client)

    async def register(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.clients.add(websocket)
        await websocket.send_text(json.dumps(self.current_state()))

    async def unregister(self, websocket: WebSocket) -> None:
        if websocket in self.clients:
            self.clients.remove(websocket)
        with contextlib.suppress(Exception):
            await websocket.close()

    def current_state(self) -> dict:
        state = self.fleet.status().to_dict()
        state["floor_count"] = self.fleet.floor_count
        return state

    async def tick(self, ticks: int) -> dict:
        async with self._lock:
            self.fleet.tick(ticks)
            state = self.current_state()
        await self.broadcast(state)
        return state

    async def call(self, floor: int, direction: str) -> dict:
        async with self._lock:
            request = self.fleet.request_call(floor, Direction.parse(direction))
            state = self.current_state()
            state["request"] = request.label
        await self.broadcast(state)
        return state

    async def press(self, car_id: int, floor: int) -> dict:
        async with self._lock:
            self.fleet.assign_floor(car_id, floor)
            state = self.current_state()
            state["car_id"] = car_id
        await self.broadcast(state)
        return state

    def snapshot(self) -> dict:
        return self.fleet.current_state().to_dict()

    async def restore(self, state: FleetState) -> dict:
        restored = FleetScheduler.from_state(state, emit=logging_sink(logger))
        async with self._lock:
            self.fleet = restored
            payload = self.current_state()
        await self.broadcast(payload)
        return payload

    async def reset(self) -> dict:
        async with self._lock:
            self.fleet = self.config.build(emit=logging_sink(logger))
            payload = self.current_state()
        await self.broadcast(payload)
        return payload


manager = FleetManager()
app = FastAPI(title="SweepLift Fleet API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def on_startup() -> None:
    await manager.start()


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await manager.stop()


@app.get("/state")
async def get_state() -> dict:
    return manager.current_state()


@app.post("/tick")
async def tick(request: TickRequest) -> dict:
    return await manager.tick(request.ticks)


@app.post("/calls")
async def call_elevator(request: CallRequest) -> dict:
    try:
        return await manager.call(request.floor, request.direction)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@app.post("/cars/{car_id}/floor")
async def press_floor(car_id: int, request: PressRequest) -> dict:
    try:
        return await manager.press(car_id, request.floor)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except RangeError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@app.get("/snapshot")
async def get_snapshot() -> dict:
    return manager.snapshot()


@app.put("/snapshot")
async def put_snapshot(snapshot: Snapshot) -> dict:
    try:
        state = FleetState.from_dict(snapshot.model_dump())
        return await manager.restore(state)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@app.post("/reset")
async def reset() -> dict:
    return await manager.reset()


@app.websocket("/ws/stream")
async def websocket_endpoint(websocket: WebSocket) -> None:
    await manager.register(websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        await manager.unregister(websocket)


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Serve the SweepLift fleet API")
    parser.add_argument("--floors", type=int, default=FleetConfig.floor_count, help="Number of floors")
    parser.add_argument("--cars", type=int, default=FleetConfig.car_count, help="Number of cars")
    parser.add_argument(
        "--tick-interval",
        type=float,
        default=None,
        help="Seconds between automatic ticks; ticks are manual when omitted",
    )
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args(argv)

    global manager
    manager = FleetManager(FleetConfig(floor_count=args.floors, car_count=args.cars), args.tick_interval)

    import uvicorn

    uvicorn.run(app, host=args.host, port=args.port, reload=False)


if __name__ == "__main__":
    main()
