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

"""
Workflow graph model: tasks, their files and the resources they run on.
"""

import logging

from enum import Enum

import networkx


class CyclicGraphError(ValueError):
  """
  Raised when task parent/child links form a cycle.
  """
  def __init__(self, cycle):
    self.cycle = list(cycle)
    super(CyclicGraphError, self).__init__("task graph contains a cycle: {}".format(
      " -> ".join(str(task.id) for task in self.cycle)))


class FileType(Enum):
  INPUT = 1
  OUTPUT = 2


class ResourceState(Enum):
  IDLE = 1
  BUSY = 2


class FileItem(object):
  """
  File consumed or produced by a task.

  Args:
    name: file name, used to match parent outputs with child inputs
    size: size in bytes
    kind: :class:`FileType`
  """
  def __init__(self, name, size, kind):
    self.name = name
    self.size = size
    self.kind = kind

  def __repr__(self):
    return "FileItem({!r}, {}, {})".format(self.name, self.size, self.kind.name)


class Task(object):
  """
  Workflow task.

  Args:
    task_id: unique identifier
    length: workload length in millions of instructions
    pes: number of processing elements the task needs
    files: list of :class:`FileItem`
  """
  def __init__(self, task_id, length, pes=1, files=None):
    self.id = task_id
    self.length = length
    self.pes = pes
    self.files = list(files) if files else []
    self.parents = []
    self.children = []
    self.resource_id = None

  def add_child(self, child):
    """
    Link child as a dependent of this task (both directions are updated).
    """
    if child not in self.children:
      self.children.append(child)
    if self not in child.parents:
      child.parents.append(self)
    return child

  @property
  def input_files(self):
    return [f for f in self.files if f.kind == FileType.INPUT]

  @property
  def output_files(self):
    return [f for f in self.files if f.kind == FileType.OUTPUT]

  def __repr__(self):
    return "Task({!r})".format(self.id)


class Resource(object):
  """
  Execution unit (virtual machine, host, ...).

  Args:
    resource_id: unique identifier
    speed: processing speed in MIPS
    pes: processing element count
    bandwidth: network bandwidth in Mbit/s
    state: :class:`ResourceState`, maintained by dynamic schedulers
    requested_load: aggregate demand currently placed on the resource
  """
  def __init__(self, resource_id, speed, pes=1, bandwidth=0., state=ResourceState.IDLE, requested_load=0.):
    self.id = resource_id
    self.speed = speed
    self.pes = pes
    self.bandwidth = bandwidth
    self.state = state
    self.requested_load = requested_load

  @property
  def is_idle(self):
    return self.state == ResourceState.IDLE

  def __repr__(self):
    return "Resource({!r})".format(self.id)


class InstanceList(object):
  """
  Object list wrapper to simplify common filtering.
  """
  def __init__(self, instances):
    self._list = list(instances)

  def by_prop(self, property_name, value, negate=False):
    """
    Select instances by property value.
    """
    if negate:
      return type(self)([el for el in self._list if getattr(el, property_name) != value])
    return type(self)([el for el in self._list if getattr(el, property_name) == value])

  def by_func(self, func):
    """
    Select instances by custom filter.
    """
    return type(self)([el for el in self._list if func(el)])

  def sorted(self, key, reverse=False):
    """
    Sort instances on custom criterion.
    """
    return type(self)(sorted(self._list, key=key, reverse=reverse))

  def __getitem__(self, arg):
    if isinstance(arg, int):
      return self._list[arg]
    elif isinstance(arg, slice):
      return type(self)(self._list[arg])
    else:
      raise TypeError("unsupported indexer type")

  def __len__(self):
    return len(self._list)

  def __contains__(self, element):
    return element in self._list

  def __iter__(self):
    return iter(self._list)

  def __str__(self):
    return str(self._list)


class Workflow(object):
  """
  Single scheduling problem instance: a task DAG and a resource pool.

  Validates the model on construction:

  * task and resource ids are unique
  * parent/child links never leave the workflow
  * the task graph is acyclic
  """

  def __init__(self, tasks, resources):
    self.__tasks = list(tasks)
    self.__resources = list(resources)
    self.__logger = logging.getLogger("model.Workflow")
    self.__task_index = self._index(self.__tasks, "task")
    self.__resource_index = self._index(self.__resources, "resource")
    self.__positions = {task: pos for pos, task in enumerate(self.__tasks)}

    for task in self.__tasks:
      for linked in task.parents + task.children:
        if self.__task_index.get(linked.id) is not linked:
          raise ValueError("task {!r} is linked to {!r} which is not part of the workflow".format(task.id, linked.id))

    graph = self.get_task_graph()
    if not networkx.is_directed_acyclic_graph(graph):
      cycle = [src for src, _ in networkx.find_cycle(graph)]
      raise CyclicGraphError(cycle)
    self.__logger.debug("Workflow loaded, %d tasks, %d links, %d resources",
                        graph.number_of_nodes(), graph.number_of_edges(), len(self.__resources))

  @staticmethod
  def _index(instances, kind):
    index = {}
    for instance in instances:
      if instance.id in index:
        raise ValueError("duplicate {} id {!r}".format(kind, instance.id))
      index[instance.id] = instance
    return index

  def get_task_graph(self):
    """
    Get the workflow DAG as a networkx.DiGraph.

    Task lengths are stored in the "weight" node attribute, the amount of bytes
    moved along an edge is stored in the "weight" edge attribute.
    """
    graph = networkx.DiGraph()
    for task in self.__tasks:
      graph.add_node(task, weight=task.length)
    for task in self.__tasks:
      for child in task.children:
        graph.add_edge(task, child, weight=shared_bytes(task, child))
      for parent in task.parents:
        if not graph.has_edge(parent, task):
          graph.add_edge(parent, task, weight=shared_bytes(parent, task))
    return graph

  def topological_order(self):
    """
    Tasks in topological order. Independent tasks keep their input order.
    """
    return list(networkx.lexicographical_topological_sort(self.get_task_graph(), key=self.__positions.get))

  def task(self, task_id):
    return self.__task_index[task_id]

  def resource(self, resource_id):
    return self.__resource_index[resource_id]

  @property
  def tasks(self):
    return InstanceList(self.__tasks)

  @property
  def resources(self):
    return InstanceList(self.__resources)

  @property
  def roots(self):
    return self.tasks.by_func(lambda t: not t.parents)


def shared_bytes(parent, child):
  """
  Bytes a child reads from its parent's outputs.

  Each parent output counts once, against the first child input with the same name.
  """
  total = 0.
  for parent_file in parent.output_files:
    for child_file in child.input_files:
      if child_file.name == parent_file.name:
        total += child_file.size
        break
  return total
