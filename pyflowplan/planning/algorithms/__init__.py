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

from .batch import MinMin, MaxMin
from .heft import HEFT
from ...parameters import PlanningAlgorithm, SchedulingAlgorithm

_PLANNERS = {
  PlanningAlgorithm.INVALID: None,
  PlanningAlgorithm.HEFT: HEFT,
}

_SCHEDULERS = {
  SchedulingAlgorithm.MINMIN: MinMin,
  SchedulingAlgorithm.MAXMIN: MaxMin,
}


def get_planner(algorithm):
  """
  Static planner class for a :class:`pyflowplan.parameters.PlanningAlgorithm`.

  Returns None for INVALID (no static planning).
  """
  return _PLANNERS[algorithm]


def get_scheduler(algorithm):
  """
  Dynamic scheduler class for a :class:`pyflowplan.parameters.SchedulingAlgorithm`.
  """
  return _SCHEDULERS[algorithm]
