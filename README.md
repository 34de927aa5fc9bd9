# seisstatics

A library for working out seismic static corrections from first breaks in
3-D surveys. It reads and writes the plain-text data files involved, computes
swath geometry, scans unform trace files and builds the rows of a stacked
first-break equation system.

## Modules

- `seisstatics.points`: `Point` (x, y; ordered by x then y, with
  `midpoint()` and `distance()`), `Station` (`ph`, `east`, `north`, `value`),
  `ReceiverPoint` (`number`, `pos`, `weight`, `fbk`), and the helpers
  `sort_points()` (stable sort by x then y) and `dedupe_points()` (drops a
  point equal to the one just before it).
- `seisstatics.stationfile`: text files of `ph east north value` records.
  `read_stations()` raises `ValueError` on an incomplete or malformed record;
  `write_stations()` writes coordinates and values with one decimal.
  `shell_sort_stations()` orders records by pile number and
  `search_station()` binary-searches a sorted list, returning an index or
  `None`. `StationFile` holds a `shots` and a `receivers` table, with
  `read_shot()` / `read_rcv()` (which sort after reading), `write_shot()` /
  `write_rcv()`, `set_shot()` / `set_rcv()`, and `find_shot()` /
  `find_rcv()`, which return the matching `Station` or `None`.
- `seisstatics.firstbreak`: `pick_first_break(samples)` returns the index just
  before the first sample below minus one fifth of the mean absolute
  amplitude, or -1.
- `seisstatics.swath`: `SurveySystem` (group interval, receive line count,
  shot point count, gaps, line and point positions) and `SwathParameters`.
  `SwathParameters.load(swath, survey, directory=".")` reads
  `swath<N>.pa1` and `swath<N>.pa2` and calls `calculate()`. There are also
  `read_common()`, `read_names()`, `write_common()`, `write_names()`,
  `shot_stations()`, `shot_position()` and `receivers_for_shot()`, plus the
  functions `swath_file_stem()` and `make_ph()` (`line * 1000 + point`).
- `seisstatics.unform`: `UnformFile(path)` opens a float format 4 unform file,
  checks its header (raising `ValueError` otherwise) and finds the groups of
  each shot as a list of `ShotInfo` in `shots`. It offers `file_number()`,
  `read_groups()`, `read_shot()`, `total_shot_number`, `close()` and use as a
  context manager. `group_file_number()` and `group_number()` read header
  fields from a group already loaded as floats.
- `seisstatics.linecheck`: pulls one shot line, shot point line or receiver
  line out of three `StationFile` data sets (intermediate, final, other
  method). `LineSelection(target, mode, shot_name, receiver_name).extract(...)`
  returns `{"middle": (title, stations), "final": ..., "other": ...}`;
  `CheckTarget` and `ShotLineMode` choose the line. The single-table functions
  `extract_shot_line()`, `extract_shot_point_line()`,
  `extract_receiver_line()`, `extract_other_shot_line()` and
  `extract_other_shot_point_line()` are also available.
- `seisstatics.zdequation`: `StackingEquations(shot_point_number,
  receiver_point_number, initial_velocity)` pairs receivers at mirrored
  offsets in each `ShotGather` and builds `EquationRow` objects of
  `(unknown index, coefficient)` terms and a right-hand side. Call
  `set_common_shot_group()` before `append()`; `set_fold_time()` and
  `set_precision()` tune the pairing, and `close()` stops further appends.
  `Couple` and `search_couple()` describe the pairs.

## Installation

```
pip install .
```

## Examples

```python
from seisstatics.stationfile import StationFile

tables = StationFile()
tables.read_shot("swath1.sns")
station = tables.find_shot(101005)
if station is not None:
    print(station.value)
```

```python
from seisstatics.firstbreak import pick_first_break

sample = pick_first_break([0.0, 0.1, -0.1, -5.0, 3.0])
```

```python
from seisstatics.unform import UnformFile

with UnformFile("line.jb") as traces:
    first_shot = traces.read_shot(0)
```

## What it does not do

- It has no command-line program and no graphical screens; everything is
  used from Python.
- It does not read the survey system parameters from a file; a
  `SurveySystem` must be filled in by the caller.
- `StackingEquations` only returns equation rows; it neither stores them in
  files nor solves the system.

## Running the tests

```
pip install ".[test]"
pytest
```