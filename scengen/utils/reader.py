from scengen.models.dto import VehicleDTO
from scengen.models.event import AddDepotEvent, AddParcelEvent, AddVehicleEvent, TimedEvent
from scengen.models.geom import Point, TimeWindow
from scengen.models.scenario import Scenario
from typing import List
import os
import pandas as pd

# vehicles csv:
# time,x,y,speed,capacity,tw_begin,tw_end
# -1,5.0,5.0,50.0,1,0,28800000
# 3600000,2.5,7.5,40.0,2,3600000,28800000
VEHICLE_COLUMNS = ["time", "x", "y", "speed", "capacity", "tw_begin", "tw_end"]

# depots csv:
# time,x,y
# -1,5.0,5.0
DEPOT_COLUMNS = ["time", "x", "y"]


def _check_columns(df: pd.DataFrame, columns: List[str], path) -> None:
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise ValueError(f"{path}: missing columns {missing}")


def read_vehicles_csv(path: os.PathLike | str) -> List[AddVehicleEvent]:
    df = pd.read_csv(path)
    _check_columns(df, VEHICLE_COLUMNS, path)
    events: List[AddVehicleEvent] = []
    for i in range(len(df)):
        row = df.iloc[i]
        dto = VehicleDTO(
            start_position=Point(float(row["x"]), float(row["y"])),
            speed=float(row["speed"]),
            capacity=int(row["capacity"]),
            availability_time_window=TimeWindow(int(row["tw_begin"]), int(row["tw_end"])),
        )
        events.append(AddVehicleEvent(int(row["time"]), dto))
    return events


def read_depots_csv(path: os.PathLike | str) -> List[AddDepotEvent]:
    df = pd.read_csv(path)
    _check_columns(df, DEPOT_COLUMNS, path)
    events: List[AddDepotEvent] = []
    for i in range(len(df)):
        row = df.iloc[i]
        events.append(AddDepotEvent(int(row["time"]), Point(float(row["x"]), float(row["y"]))))
    return events


def _event_row(index: int, e: TimedEvent) -> dict:
    row = {"index": index, "type": e.event_type.name, "time": e.time}
    if isinstance(e, AddDepotEvent):
        row.update(x=e.position.x, y=e.position.y)
    elif isinstance(e, AddVehicleEvent):
        v = e.vehicle
        row.update(x=v.start_position.x, y=v.start_position.y, speed=v.speed, capacity=v.capacity,
                   tw_begin=v.availability_time_window.begin, tw_end=v.availability_time_window.end)
    elif isinstance(e, AddParcelEvent):
        p = e.parcel
        row.update(x=p.pickup_position.x, y=p.pickup_position.y,
                   dest_x=p.delivery_position.x, dest_y=p.delivery_position.y,
                   capacity=p.needed_capacity,
                   tw_begin=p.pickup_time_window.begin, tw_end=p.pickup_time_window.end,
                   dest_tw_begin=p.delivery_time_window.begin, dest_tw_end=p.delivery_time_window.end,
                   pickup_duration=p.pickup_duration, delivery_duration=p.delivery_duration)
    return row


def scenario_to_frame(scenario: Scenario) -> pd.DataFrame:
    """One row per event, in scenario order. Columns that do not apply to an
    event kind are NaN."""
    rows = [_event_row(i, e) for i, e in enumerate(scenario.events)]
    df = pd.DataFrame(rows, columns=None if rows else ["index", "type", "time"])
    return df.set_index("index")
