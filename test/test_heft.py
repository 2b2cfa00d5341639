# This file is part of pyflowplan, a Python library for workflow planning and scheduling.
#
# Copyright 2015-2016 Alexey Nazarenko and contributors
#
# License:  Standard 3-clause BSD; see "license.txt" for full license terms
#           and contributor agreement.

import math
import random
import unittest

from pyflowplan.model import FileItem, FileType, Resource, Task, Workflow
from pyflowplan.planning.algorithms import HEFT
from pyflowplan.planning.costs import CostModel
from pyflowplan.planning.ranking import upward_ranks

from .test_ranking import random_dag


def _edge(parent, child, size):
  name = "%s_%s" % (parent.id, child.id)
  parent.files.append(FileItem(name, size, FileType.OUTPUT))
  child.files.append(FileItem(name, size, FileType.INPUT))
  parent.add_child(child)


class TestHEFT(unittest.TestCase):
  def test_single_task(self):
    task = Task("only", 1000)
    vm = Resource("vm0", 250, bandwidth=10)
    planner = HEFT(Workflow([task], [vm]))
    state = planner.run()
    self.assertEqual(task.resource_id, "vm0")
    self.assertEqual(state[task]["ect"], 4.)
    self.assertEqual(planner.expected_makespan, 4.)
    self.assertGreaterEqual(planner.scheduler_time, 0.)

  def test_diamond(self):
    """
    A -> {B, C} -> D with B on the critical path.

    Hand-computed plan (vm0 is twice as fast as vm1, 1 MB moves in 1 s):
      A: vm0 [0, 1]
      B: vm0 [1, 5]
      C: vm1 [2, 4]   (vm0 would finish at 6)
      D: vm0 [7, 9]   (ready at max(5, 4 + 3); vm1 would finish at 10)
    """
    vm0 = Resource("vm0", 100, bandwidth=8)
    vm1 = Resource("vm1", 50, bandwidth=8)
    a, b, c, d = Task("A", 100), Task("B", 400), Task("C", 100), Task("D", 200)
    _edge(a, b, 2e6)
    _edge(a, c, 1e6)
    _edge(b, d, 1e6)
    _edge(c, d, 3e6)
    workflow = Workflow([a, b, c, d], [vm0, vm1])

    model = CostModel(list(workflow.tasks), list(workflow.resources))
    ranks = upward_ranks(workflow.tasks, model)
    self.assertAlmostEqual(ranks[d], 3.)
    self.assertAlmostEqual(ranks[c], 7.5)
    self.assertAlmostEqual(ranks[b], 10.)
    self.assertAlmostEqual(ranks[a], 13.5)

    planner = HEFT(workflow)
    state = planner.run()
    self.assertEqual([t.resource_id for t in (a, b, c, d)], ["vm0", "vm0", "vm1", "vm0"])
    self.assertAlmostEqual(state[a]["ect"], 1.)
    self.assertAlmostEqual(state[b]["ect"], 5.)
    self.assertAlmostEqual(state[c]["ect"], 4.)
    self.assertAlmostEqual(state[d]["ect"], 9.)
    self.assertAlmostEqual(planner.expected_makespan, 9.)

    ready_d = model.est(d, vm0, state)
    expected_ready = max(state[b]["ect"], state[c]["ect"] + model.transfer(c, d))
    self.assertAlmostEqual(ready_d, expected_ready)
    self.assertAlmostEqual(ready_d, 7.)
    self.assertEqual(state.schedule, {vm0: [a, b, d], vm1: [c]})

  def test_all_resources_infeasible(self):
    """
    When no resource has enough processing elements all costs tie at infinity
    and the first resource is used.
    """
    wide = Task("wide", 100, pes=8)
    vms = [Resource("vm0", 100, pes=2), Resource("vm1", 500, pes=4)]
    state = HEFT(Workflow([wide], vms)).run()
    self.assertEqual(wide.resource_id, "vm0")
    self.assertTrue(math.isinf(state[wide]["ect"]))

  def test_infeasible_resource_avoided(self):
    wide = Task("wide", 100, pes=4)
    vms = [Resource("fast", 1000, pes=2), Resource("slow", 10, pes=4)]
    state = HEFT(Workflow([wide], vms)).run()
    self.assertEqual(wide.resource_id, "slow")
    self.assertEqual(state[wide]["ect"], 10.)

  def test_independent_tasks_spread(self):
    tasks = [Task("t%d" % i, 100) for i in range(4)]
    vms = [Resource("vm%d" % i, 100) for i in range(2)]
    state = HEFT(Workflow(tasks, vms)).run()
    self.assertEqual(sorted(len(v) for v in state.schedule.values()), [2, 2])
    self.assertEqual(state.makespan, 2.)

  def test_equal_ranks_keep_precedence(self):
    """
    Zero-cost tasks have equal ranks; a child listed first must still follow its parent.
    """
    parent, child = Task("parent", 0), Task("child", 0)
    parent.add_child(child)
    state = HEFT(Workflow([child, parent], [Resource("vm0", 100), Resource("vm1", 100)])).run()
    self.assertEqual(state[child]["ect"], 0.)
    self.assertEqual(child.resource_id, "vm0")

  def test_empty_pool(self):
    with self.assertRaises(ValueError):
      HEFT(Workflow([Task("a", 1)], [])).run()

  def test_random_workflows(self):
    """
    Parents always finish before children start, timelines never overlap.
    """
    rng = random.Random(7)
    for _ in range(10):
      tasks = random_dag(rng, 30)
      for task in tasks:
        task.pes = 1
      vms = [Resource("vm%d" % i, rng.choice([50, 100, 200]), bandwidth=rng.choice([10, 100])) for i in range(4)]
      workflow = Workflow(tasks, vms)
      planner = HEFT(workflow)
      state = planner.run()
      model = CostModel(tasks, vms)
      starts = {}
      for vm, timesheet in state.timeline.items():
        for previous, current in zip(timesheet, timesheet[1:]):
          self.assertLessEqual(previous.finish, current.start)
        for slot in timesheet:
          starts[slot.task] = slot.start
      for task in tasks:
        self.assertEqual(task.resource_id, state[task]["resource"].id)
        for parent in task.parents:
          self.assertLessEqual(state[parent]["ect"], starts[task] + 1e-9)
          if state[parent]["resource"] is not state[task]["resource"]:
            self.assertLessEqual(state[parent]["ect"] + model.transfer(parent, task), starts[task] + 1e-9)
      self.assertAlmostEqual(planner.expected_makespan, max(state.finish_times.values()))

  def test_rerun_is_independent(self):
    tasks = random_dag(random.Random(3), 15)
    for task in tasks:
      task.pes = 1
    workflow = Workflow(tasks, [Resource("vm0", 100, bandwidth=10), Resource("vm1", 70, bandwidth=10)])
    first = HEFT(workflow).run()
    second = HEFT(workflow).run()
    self.assertEqual(first.finish_times, second.finish_times)
    self.assertEqual(first.schedule, second.schedule)


if __name__ == '__main__':
  unittest.main()
