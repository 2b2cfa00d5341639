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

import numpy

from ..model import shared_bytes

MILLION = 1e6
INFEASIBLE = numpy.inf


def average_bandwidth(resources):
  """
  Mean bandwidth of the resource pool in Mbit/s.

  Used as the bandwidth of every transfer, no per-link model is involved.
  """
  resources = list(resources)
  if not resources:
    raise ValueError("cannot compute average bandwidth of an empty resource pool")
  return sum(r.bandwidth for r in resources) / float(len(resources))


def computation_costs(tasks, resources):
  """
  Build the computation cost matrix (tasks x resources) in seconds.

  Resource with too few processing elements for a task gets an infinite cost.
  """
  costs = numpy.zeros((len(tasks), len(resources)))
  for t, task in enumerate(tasks):
    for r, resource in enumerate(resources):
      if resource.pes < task.pes:
        costs[t][r] = INFEASIBLE
      else:
        costs[t][r] = float(task.length) / resource.speed
  return costs


def transfer_cost(parent, child, bandwidth):
  """
  Time in seconds to move all parent outputs consumed by a child.

  File sizes are in bytes, bandwidth is in Mbit/s.
  """
  megabytes = shared_bytes(parent, child) / MILLION
  if not megabytes:
    return 0.
  if bandwidth <= 0:
    return INFEASIBLE
  return megabytes * 8 / bandwidth


class CostModel(object):
  """
  Linear cost model of a single planning run.

  Attributes:
    tasks: tasks in the order of the computation matrix rows
    resources: resources in the order of the computation matrix columns
    bandwidth: average bandwidth of the pool, Mbit/s
    computation: numpy matrix of task execution times
    transfers: dict (parent, child) -> transfer time for every graph edge
  """
  def __init__(self, tasks, resources):
    self.tasks = list(tasks)
    self.resources = list(resources)
    self.bandwidth = average_bandwidth(self.resources)
    self.task_map = {task: idx for idx, task in enumerate(self.tasks)}
    self.resource_map = {resource: idx for idx, resource in enumerate(self.resources)}
    self.computation = computation_costs(self.tasks, self.resources)
    self.transfers = {}
    for parent in self.tasks:
      for child in parent.children:
        self.transfers[(parent, child)] = transfer_cost(parent, child, self.bandwidth)

  def eet(self, task, resource):
    """
    Expected execution time of a task on a resource.
    """
    return self.computation[self.task_map[task]][self.resource_map[resource]]

  def mean_eet(self, task):
    """
    Execution time averaged over all resources, infeasible ones included.
    """
    return self.computation[self.task_map[task]].mean()

  def transfer(self, parent, child):
    return self.transfers.get((parent, child), 0.)

  def est(self, task, resource, state):
    """
    Earliest time all parent data is available on a resource.

    Parents must already be scheduled in the given state. Transfer time is charged
    only when a parent runs on a different resource.
    """
    ready_time = 0.
    for parent in task.parents:
      parent_state = state.task_states.get(parent)
      if parent_state is None:
        raise Exception("cannot place task {!r}: parent {!r} is not scheduled yet".format(task.id, parent.id))
      parent_ready = parent_state["ect"]
      if parent_state["resource"].id != resource.id:
        parent_ready += self.transfer(parent, task)
      ready_time = max(ready_time, parent_ready)
    return ready_time
