# SPDX-License-Identifier: MIT

from typing import NewType

TrackableId = NewType("TrackableId", int)
ChartableId = NewType("ChartableId", int)
ChartId = NewType("ChartId", int)

# Calendar day as a proleptic ordinal (date.toordinal())
type Day = int
