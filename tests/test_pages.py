"""
Unit tests for page tree operations.
"""

import unittest

from pageweave.engine import (
    PageNotFoundError,
    add_page,
    ancestors,
    child_pages,
    descendant_ids,
    find_page,
    remove_page,
    replace_page,
    require_page,
    root_pages,
    walk_pages,
)
from pageweave.models import new_page, new_workspace


class TestPageTree(unittest.TestCase):
    """Test lookups and edits on a small tree.

    a
      c
        d
    b
    """

    def setUp(self):
        self.a = new_page(title="a")
        self.b = new_page(title="b")
        self.c = new_page(title="c")
        self.d = new_page(title="d")

        workspace = new_workspace("Tree")
        workspace = add_page(workspace, self.a)
        workspace = add_page(workspace, self.b)
        workspace = add_page(workspace, self.c, parent_id=self.a.id)
        workspace = add_page(workspace, self.d, parent_id=self.c.id)
        self.workspace = workspace

    def titles(self, pages):
        return [page.title for page in pages]

    def test_roots_and_children(self):
        self.assertEqual(self.titles(root_pages(self.workspace)), ["a", "b"])
        self.assertEqual(self.titles(child_pages(self.workspace, self.a.id)), ["c"])
        self.assertEqual(child_pages(self.workspace, self.b.id), [])
        self.assertEqual(child_pages(self.workspace, "missing"), [])

    def test_parent_links_are_set(self):
        c = find_page(self.workspace, self.c.id)
        a = find_page(self.workspace, self.a.id)

        self.assertEqual(c.parent_id, self.a.id)
        self.assertEqual(a.child_ids, [self.c.id])

    def test_pages_are_kept_in_depth_first_order(self):
        self.assertEqual(self.titles(self.workspace.pages), ["a", "c", "d", "b"])

        workspace = add_page(self.workspace, new_page(title="e"), parent_id=self.a.id)
        self.assertEqual(self.titles(workspace.pages), ["a", "c", "d", "e", "b"])

    def test_walk_pages(self):
        walked = [(page.title, depth) for page, depth in walk_pages(self.workspace)]
        self.assertEqual(walked, [("a", 0), ("c", 1), ("d", 2), ("b", 0)])

    def test_descendants_and_ancestors(self):
        self.assertEqual(descendant_ids(self.workspace, self.a.id), [self.c.id, self.d.id])
        self.assertEqual(descendant_ids(self.workspace, self.b.id), [])
        self.assertEqual(self.titles(ancestors(self.workspace, self.d.id)), ["c", "a"])
        self.assertEqual(ancestors(self.workspace, self.a.id), [])

    def test_ancestors_stop_on_cycle(self):
        a = find_page(self.workspace, self.a.id).model_copy(update={"parent_id": self.d.id})
        workspace = replace_page(self.workspace, a)

        self.assertEqual(self.titles(ancestors(workspace, self.d.id)), ["c", "a"])

    def test_add_with_unknown_parent_becomes_root(self):
        orphan = new_page(title="orphan", parent_id="missing")
        workspace = add_page(self.workspace, orphan)

        self.assertIsNone(find_page(workspace, orphan.id).parent_id)
        self.assertEqual(self.titles(root_pages(workspace)), ["a", "b", "orphan"])

    def test_add_uses_page_parent(self):
        page = new_page(title="e", parent_id=self.b.id)
        workspace = add_page(self.workspace, page)

        self.assertEqual(self.titles(child_pages(workspace, self.b.id)), ["e"])

    def test_add_duplicate_id_is_noop(self):
        self.assertIs(add_page(self.workspace, self.a), self.workspace)

    def test_remove_page_removes_subtree(self):
        workspace = remove_page(self.workspace, self.c.id)

        self.assertEqual(self.titles(workspace.pages), ["a", "b"])
        self.assertEqual(find_page(workspace, self.a.id).child_ids, [])

    def test_remove_root(self):
        workspace = remove_page(self.workspace, self.a.id)
        self.assertEqual(self.titles(workspace.pages), ["b"])

    def test_remove_unknown_is_noop(self):
        self.assertIs(remove_page(self.workspace, "missing"), self.workspace)

    def test_replace_page(self):
        renamed = self.b.model_copy(update={"title": "renamed"})
        workspace = replace_page(self.workspace, renamed)

        self.assertEqual(find_page(workspace, self.b.id).title, "renamed")
        self.assertIs(replace_page(self.workspace, new_page()), self.workspace)

    def test_require_page(self):
        self.assertEqual(require_page(self.workspace, self.d.id).title, "d")
        with self.assertRaises(PageNotFoundError):
            require_page(self.workspace, "missing")

    def test_input_workspace_is_not_modified(self):
        remove_page(self.workspace, self.a.id)
        add_page(self.workspace, new_page(title="z"))

        self.assertEqual(len(self.workspace.pages), 4)


if __name__ == '__main__':
    unittest.main(verbosity=2)
