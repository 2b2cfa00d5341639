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

import abc
import logging
import time

from ..model import InstanceList, ResourceState
from .state import SchedulerState


class Scheduler(metaclass=abc.ABCMeta):
  """
  Base class for all scheduling algorithms.

  Defines scheduler public interface and provides (very few) useful members for
  actual schedulers:

    *self._log* - Logger object (see logging module documentation)
  """
  def __init__(self):
    self._log = logging.getLogger(type(self).__name__)

  @abc.abstractmethod
  def run(self, *args):
    """
    Perform a full scheduling pass and return its result.

    Note:
      Not intended to be overriden in the concrete algorithms.
    """
    raise NotImplementedError()

  @property
  @abc.abstractmethod
  def scheduler_time(self):
    """
    Wall clock time spent scheduling.
    """
    raise NotImplementedError()


class StaticScheduler(Scheduler):
  """
  Base class for static planning algorithms.

  Plans the whole workflow at once and checks that the algorithm left no task behind.
  """
  def __init__(self, workflow):
    """
    Initialize scheduler instance.

    Args:
      workflow: a :class:`pyflowplan.model.Workflow` object
    """
    super(StaticScheduler, self).__init__()
    self._workflow = workflow
    self.__scheduler_time = -1.
    self.__expected_makespan = None

  def run(self):
    """
    Build a static plan for the workflow.

    Returns:
      :class:`pyflowplan.planning.state.SchedulerState` of the finished run
    """
    start_time = time.time()
    result = self.get_schedule(self._workflow)
    self.__scheduler_time = time.time() - start_time
    self._log.debug("Scheduling time: %f", self.__scheduler_time)
    if not (isinstance(result, tuple) and len(result) == 2 and isinstance(result[0], SchedulerState)):
      raise Exception("'get_schedule' must return a tuple (<scheduler state>, <expected makespan>)")
    state, self.__expected_makespan = result
    self._log.debug("Expected makespan: %f", self.__expected_makespan)

    unscheduled = [task for task in self._workflow.tasks if task not in state]
    if unscheduled:
      raise Exception("some tasks are left unscheduled by static algorithm: {}".format([t.id for t in unscheduled]))
    for task in self._workflow.tasks:
      for parent in task.parents:
        if state[parent]["ect"] > self._slot(state, task).start:
          raise Exception("Sanity check FAILED! Task {!r} starts before its parent {!r} finishes".format(task.id, parent.id))
    return state

  @staticmethod
  def _slot(state, task):
    resource = state[task]["resource"]
    for slot in state.timeline[resource]:
      if slot.task is task:
        return slot
    raise Exception("task {!r} has no slot on resource {!r}".format(task.id, resource.id))

  @abc.abstractmethod
  def get_schedule(self, workflow):
    """
    Abstract method that need to be overriden in scheduler implementation.

    Args:
      workflow: a :class:`pyflowplan.model.Workflow` object

    Returns:
      tuple (<scheduler state>, <expected makespan in seconds>)
    """
    raise NotImplementedError()

  @property
  def scheduler_time(self):
    return self.__scheduler_time

  @property
  def expected_makespan(self):
    return self.__expected_makespan


class DynamicScheduler(Scheduler):
  """
  Base class for dynamic (round-based) scheduling algorithms.

  Every round gets the tasks that are ready right now and the resource pool.
  Only idle resources are offered to the algorithm.
  """
  def __init__(self):
    super(DynamicScheduler, self).__init__()
    self.__scheduler_time = 0.
    self.__rounds = 0

  def run(self, ready_tasks, resources):
    """
    Execute one scheduling round.

    Args:
      ready_tasks: tasks with all dependencies satisfied
      resources: resource pool; busy resources are skipped

    Returns:
      list of tasks matched in this round, in matching order
    """
    start_time = time.time()
    ready_tasks = list(ready_tasks)
    idle = InstanceList(resources).by_prop("state", ResourceState.IDLE)
    scheduled = self.schedule(ready_tasks, idle)
    self.__scheduler_time += time.time() - start_time
    self.__rounds += 1
    self._log.debug("Round %d: %d ready, %d idle, %d scheduled",
                    self.__rounds, len(ready_tasks), len(idle), len(scheduled))
    return scheduled

  @abc.abstractmethod
  def schedule(self, ready_tasks, idle_resources):
    """
    Abstract method that need to be overriden in scheduler implementation.

    Args:
      ready_tasks: list of ready tasks
      idle_resources: :class:`pyflowplan.model.InstanceList` of idle resources

    Returns:
      list of scheduled tasks
    """
    raise NotImplementedError()

  @property
  def scheduler_time(self):
    return self.__scheduler_time

  @property
  def rounds(self):
    return self.__rounds
