"""Tests for stock acceptance criteria and observers."""

from __future__ import annotations

import logging
import unittest
from unittest import mock

from branchscan.crawler import CandidateHead, Probe
from branchscan.criteria import AllOfCriteria, RequiredPathsCriteria
from branchscan.observers import CollectingObserver, HeadSelectingObserver, LimitObserver
from branchscan.repository import MemoryRepositoryView, NodeKind

LOG = logging.getLogger("branchscan.tests.criteria")


def _probe(existing: set[str]) -> Probe:
    view = mock.Mock()
    view.check_path.side_effect = lambda path, _revision: NodeKind.FILE if path in existing else NodeKind.NONE
    return Probe(name="trunk", root_path="project/trunk", revision=5, last_modified=None, view=view)


class RequiredPathsCriteriaTests(unittest.TestCase):
    def test_all_requires_every_path(self) -> None:
        criteria = RequiredPathsCriteria(("pom.xml", "Jenkinsfile"))
        self.assertTrue(criteria.is_head(_probe({"project/trunk/pom.xml", "project/trunk/Jenkinsfile"}), LOG))
        self.assertFalse(criteria.is_head(_probe({"project/trunk/pom.xml"}), LOG))

    def test_any_requires_one_path(self) -> None:
        criteria = RequiredPathsCriteria(("pom.xml", "build.gradle"), match="any")
        self.assertTrue(criteria.is_head(_probe({"project/trunk/build.gradle"}), LOG))
        self.assertFalse(criteria.is_head(_probe(set()), LOG))

    def test_no_paths_accepts_everything(self) -> None:
        self.assertTrue(RequiredPathsCriteria(()).is_head(_probe(set()), LOG))

    def test_invalid_match_mode(self) -> None:
        with self.assertRaises(ValueError):
            RequiredPathsCriteria(("pom.xml",), match="some")

    def test_probe_exists_uses_pinned_revision(self) -> None:
        view = MemoryRepositoryView()
        view.commit(add_dirs=["trunk"])
        view.commit(add_files=["trunk/pom.xml"])
        early = Probe(name="trunk", root_path="trunk", revision=1, last_modified=1000, view=view)
        late = Probe(name="trunk", root_path="trunk", revision=2, last_modified=2000, view=view)
        self.assertFalse(early.exists("pom.xml"))
        self.assertTrue(late.exists("pom.xml"))

    def test_all_of_short_circuits_on_rejection(self) -> None:
        reject = mock.Mock()
        reject.is_head.return_value = False
        never_called = mock.Mock()
        criteria = AllOfCriteria.of([reject, None, never_called])
        self.assertFalse(criteria.is_head(_probe(set()), LOG))
        never_called.is_head.assert_not_called()
        self.assertEqual(len(criteria.members), 2)


class ObserverTests(unittest.TestCase):
    def test_collecting_observer_keeps_discovery_order(self) -> None:
        observer = CollectingObserver()
        observer.observe(CandidateHead("trunk", 3), 3)
        observer.observe(CandidateHead("branches/a", 2), 2)
        self.assertTrue(observer.is_observing())
        self.assertEqual([head.name for head in observer.result()], ["trunk", "branches/a"])

    def test_limit_observer_stops_after_limit(self) -> None:
        observer = LimitObserver(2)
        observer.observe(CandidateHead("a", 1), 1)
        self.assertTrue(observer.is_observing())
        observer.observe(CandidateHead("b", 1), 1)
        self.assertFalse(observer.is_observing())
        with self.assertRaises(ValueError):
            LimitObserver(0)

    def test_selecting_observer_waits_for_named_head(self) -> None:
        observer = HeadSelectingObserver("branches/b")
        observer.observe(CandidateHead("branches/a", 1), 1)
        self.assertTrue(observer.is_observing())
        observer.observe(CandidateHead("branches/b", 4), 4)
        self.assertFalse(observer.is_observing())
        self.assertEqual(observer.head, CandidateHead("branches/b", 4))


if __name__ == "__main__":
    unittest.main()
