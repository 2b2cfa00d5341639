# This file is part of pyflowplan, a Python library for workflow planning and scheduling.
#
# Copyright 2015-2016 Alexey Nazarenko and contributors
#
# This library is free software: you can redistribute it and/or modify
# it under the terms of the GNU Lesser General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This library is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public
# along with this library.  If not, see <http://www.gnu.org/licenses/>.
#

import os

from enum import Enum


class PlanningAlgorithm(Enum):
  """
  Static planning run before execution starts.

  - INVALID (default):
    no static plan, resources are assigned by the dynamic scheduler only.

  - HEFT:
    Heterogeneous Earliest Finish Time list scheduling.
  """
  INVALID = 0
  HEFT = 1


class SchedulingAlgorithm(Enum):
  """
  Dynamic scheduling applied to ready tasks in every round.

  - MINMIN (default):
    shortest ready task goes first.

  - MAXMIN:
    longest ready task goes first.
  """
  MINMIN = 1
  MAXMIN = 2


class Parameters(object):
  """
  Algorithm selection.

  Explicit arguments win. Otherwise the values are taken from environment variables
  PYFLOWPLAN_PLANNING_ALGORITHM and PYFLOWPLAN_SCHEDULING_ALGORITHM (enum member names).
  """
  PLANNING_ENV = "PYFLOWPLAN_PLANNING_ALGORITHM"
  SCHEDULING_ENV = "PYFLOWPLAN_SCHEDULING_ALGORITHM"

  def __init__(self, planning=None, scheduling=None, environ=None):
    environ = os.environ if environ is None else environ
    if planning is None:
      planning = environ.get(self.PLANNING_ENV, PlanningAlgorithm.INVALID)
    if scheduling is None:
      scheduling = environ.get(self.SCHEDULING_ENV, SchedulingAlgorithm.MINMIN)
    self.planning = _coerce(planning, PlanningAlgorithm)
    self.scheduling = _coerce(scheduling, SchedulingAlgorithm)

  def __repr__(self):
    return "Parameters(planning={}, scheduling={})".format(self.planning.name, self.scheduling.name)


def _coerce(value, enum_type):
  if isinstance(value, enum_type):
    return value
  try:
    return enum_type[str(value).upper()]
  except KeyError:
    raise ValueError("unknown {} '{}', expected one of: {}".format(
      enum_type.__name__, value, ", ".join(member.name for member in enum_type)))
