"""
Unit tests for the block editing operations.
"""

import random
import unittest

from pydantic import ValidationError

from pageweave.engine import (
    MoveDirection,
    can_move,
    delete_block,
    insert_block,
    insert_generated_content,
    move_block,
    ordered_blocks,
    reorder_all,
    update_block,
)
from pageweave.models import BlockType, block_text, new_page


def make_page(*texts):
    """Build a page whose paragraphs hold texts, in order."""
    page = new_page()
    page = update_block(page, page.blocks[0].id, {"text": texts[0]})
    for text in texts[1:]:
        last_id = ordered_blocks(page)[-1].id
        page, block_id = insert_block(page, BlockType.PARAGRAPH, last_id)
        page = update_block(page, block_id, {"text": text})
    return page


def texts_of(page):
    return [block_text(block) for block in ordered_blocks(page)]


def ids_of(page):
    return [block.id for block in ordered_blocks(page)]


def assert_dense(test, page):
    test.assertEqual(sorted(block.position for block in page.blocks), list(range(len(page.blocks))))


class TestInsertBlock(unittest.TestCase):
    """Test block insertion."""

    def test_insert_after_first_block(self):
        page = make_page("A", "B")
        a_id, b_id = ids_of(page)

        page, new_id = insert_block(page, "heading-1", after_block_id=a_id)

        self.assertEqual(ids_of(page), [a_id, new_id, b_id])
        self.assertEqual([block.position for block in ordered_blocks(page)], [0, 1, 2])
        self.assertEqual(ordered_blocks(page)[1].type, "heading-1")

    def test_insert_without_anchor_appends(self):
        page = make_page("A", "B")
        page, new_id = insert_block(page, BlockType.QUOTE)

        self.assertEqual(ids_of(page)[-1], new_id)
        assert_dense(self, page)

    def test_insert_after_unknown_block_appends(self):
        page = make_page("A", "B")
        page, new_id = insert_block(page, BlockType.PARAGRAPH, after_block_id="missing")

        self.assertEqual(ids_of(page)[-1], new_id)
        self.assertEqual(texts_of(page), ["A", "B", ""])

    def test_insert_after_last_block(self):
        page = make_page("A", "B")
        page, new_id = insert_block(page, BlockType.PARAGRAPH, after_block_id=ids_of(page)[-1])

        self.assertEqual(ids_of(page)[-1], new_id)

    def test_input_page_is_not_modified(self):
        page = make_page("A")
        insert_block(page, BlockType.PARAGRAPH)

        self.assertEqual(len(page.blocks), 1)


class TestUpdateBlock(unittest.TestCase):
    """Test content updates."""

    def test_patch_overwrites_and_preserves(self):
        page = new_page()
        page, todo_id = insert_block(page, BlockType.TO_DO)
        page = update_block(page, todo_id, {"text": "Buy milk"})
        page = update_block(page, todo_id, {"checked": True})

        todo = ordered_blocks(page)[1]
        self.assertEqual(todo.content.text, "Buy milk")
        self.assertTrue(todo.content.checked)
        self.assertTrue(todo.metadata.checked)

    def test_code_language_kept_in_sync(self):
        page = new_page()
        page, code_id = insert_block(page, BlockType.CODE)
        page = update_block(page, code_id, {"language": "python"})

        code = ordered_blocks(page)[1]
        self.assertEqual(code.content.language, "python")
        self.assertEqual(code.metadata.language, "python")

    def test_callout_color_kept_in_sync(self):
        page = new_page()
        page, callout_id = insert_block(page, BlockType.CALLOUT)
        page = update_block(page, callout_id, {"color": "red", "text": "Careful"})

        callout = ordered_blocks(page)[1]
        self.assertEqual(callout.metadata.color, "red")
        self.assertEqual(callout.content.emoji, "💡")

    def test_unknown_fields_ignored(self):
        page = make_page("A")
        block_id = ids_of(page)[0]
        page = update_block(page, block_id, {"text": "B", "checked": True})

        self.assertEqual(texts_of(page), ["B"])
        self.assertFalse(hasattr(ordered_blocks(page)[0].content, "checked"))

    def test_position_unchanged(self):
        page = make_page("A", "B", "C")
        middle = ids_of(page)[1]
        page = update_block(page, middle, {"text": "changed"})

        self.assertEqual(ordered_blocks(page)[1].id, middle)
        self.assertEqual(ordered_blocks(page)[1].position, 1)

    def test_unknown_block_is_noop(self):
        page = make_page("A")
        self.assertIs(update_block(page, "missing", {"text": "x"}), page)

    def test_wrong_value_type_rejected(self):
        page = new_page()
        page, todo_id = insert_block(page, BlockType.TO_DO)
        with self.assertRaises(ValidationError):
            update_block(page, todo_id, {"checked": "maybe"})


class TestDeleteBlock(unittest.TestCase):
    """Test block deletion and the next selection."""

    def test_delete_middle_selects_previous(self):
        page = make_page("A", "B", "C")
        a_id, b_id, c_id = ids_of(page)

        page, selection = delete_block(page, b_id)

        self.assertEqual(ids_of(page), [a_id, c_id])
        self.assertEqual(selection, a_id)
        assert_dense(self, page)

    def test_delete_first_selects_following(self):
        page = make_page("A", "B")
        a_id, b_id = ids_of(page)

        page, selection = delete_block(page, a_id)

        self.assertEqual(ids_of(page), [b_id])
        self.assertEqual(selection, b_id)
        self.assertEqual(page.blocks[0].position, 0)

    def test_delete_last_selects_previous(self):
        page = make_page("A", "B", "C")
        _, b_id, c_id = ids_of(page)

        page, selection = delete_block(page, c_id)
        self.assertEqual(selection, b_id)

    def test_last_block_is_never_deleted(self):
        page = make_page("only")
        result, selection = delete_block(page, page.blocks[0].id)

        self.assertIs(result, page)
        self.assertIsNone(selection)
        self.assertEqual(len(result.blocks), 1)

    def test_unknown_block_is_noop(self):
        page = make_page("A", "B")
        result, selection = delete_block(page, "missing")

        self.assertIs(result, page)
        self.assertIsNone(selection)


class TestMoveBlock(unittest.TestCase):
    """Test moving blocks."""

    def test_move_up(self):
        page = make_page("A", "B", "C")
        page = move_block(page, ids_of(page)[1], "up")

        self.assertEqual(texts_of(page), ["B", "A", "C"])
        assert_dense(self, page)

    def test_move_down(self):
        page = make_page("A", "B", "C")
        page = move_block(page, ids_of(page)[0], MoveDirection.DOWN)

        self.assertEqual(texts_of(page), ["B", "A", "C"])

    def test_move_last_down_is_noop(self):
        page = make_page("A", "B", "C")
        self.assertIs(move_block(page, ids_of(page)[2], "down"), page)

    def test_move_first_up_is_noop(self):
        page = make_page("A", "B", "C")
        self.assertIs(move_block(page, ids_of(page)[0], "up"), page)

    def test_move_unknown_is_noop(self):
        page = make_page("A", "B")
        self.assertIs(move_block(page, "missing", "up"), page)

    def test_up_then_down_restores_order(self):
        page = make_page("A", "B", "C", "D")
        original = ids_of(page)

        for index in range(1, 4):
            block_id = original[index]
            moved = move_block(move_block(page, block_id, "up"), block_id, "down")
            self.assertEqual(ids_of(moved), original)

        for index in range(0, 3):
            block_id = original[index]
            moved = move_block(move_block(page, block_id, "down"), block_id, "up")
            self.assertEqual(ids_of(moved), original)

    def test_invalid_direction(self):
        page = make_page("A", "B")
        with self.assertRaises(ValueError):
            move_block(page, ids_of(page)[0], "sideways")

    def test_can_move(self):
        page = make_page("A", "B")
        first, last = ids_of(page)

        self.assertFalse(can_move(page, first, "up"))
        self.assertTrue(can_move(page, first, "down"))
        self.assertTrue(can_move(page, last, "up"))
        self.assertFalse(can_move(page, last, "down"))
        self.assertFalse(can_move(page, "missing", "down"))


class TestReorderAll(unittest.TestCase):
    """Test position normalisation."""

    def test_heals_sparse_positions(self):
        page = make_page("A", "B", "C")
        blocks = ordered_blocks(page)
        sparse = page.model_copy(update={"blocks": [
            blocks[2].model_copy(update={"position": 9}),
            blocks[0].model_copy(update={"position": 2}),
            blocks[1].model_copy(update={"position": 5}),
        ]})

        healed = reorder_all(sparse)

        self.assertEqual(texts_of(healed), ["A", "B", "C"])
        self.assertEqual([block.position for block in healed.blocks], [0, 1, 2])

    def test_duplicate_positions_keep_list_order(self):
        page = make_page("A", "B")
        blocks = ordered_blocks(page)
        duplicated = page.model_copy(update={"blocks": [
            blocks[0].model_copy(update={"position": 0}),
            blocks[1].model_copy(update={"position": 0}),
        ]})

        healed = reorder_all(duplicated)

        self.assertEqual(texts_of(healed), ["A", "B"])
        assert_dense(self, healed)

    def test_dense_page_is_returned_unchanged(self):
        page = make_page("A", "B")
        self.assertIs(reorder_all(page), page)


class TestGeneratedContent(unittest.TestCase):
    """Test insertion of externally generated text."""

    def test_inserted_as_paragraph_after_anchor(self):
        page = make_page("A", "B")
        a_id = ids_of(page)[0]
        text = "First idea\n• Second idea\n• Third idea"

        page, new_id = insert_generated_content(page, a_id, text)

        block = ordered_blocks(page)[1]
        self.assertEqual(block.id, new_id)
        self.assertEqual(block.type, "paragraph")
        self.assertEqual(block.content.text, text)
        assert_dense(self, page)

    def test_appends_without_anchor(self):
        page = make_page("A")
        page, new_id = insert_generated_content(page, None, "Summary")

        self.assertEqual(texts_of(page), ["A", "Summary"])


class TestRandomEditSequences(unittest.TestCase):
    """Positions stay dense and pages stay non-empty across random edits."""

    def test_random_operations_keep_invariants(self):
        rng = random.Random(1234)
        page = make_page("start")
        seen_ids = set(ids_of(page))

        for _ in range(400):
            ids = ids_of(page)
            operation = rng.choice(["insert", "insert_after", "delete", "move", "update"])
            target = rng.choice(ids)

            if operation == "insert":
                page, new_id = insert_block(page, rng.choice(list(BlockType)))
                self.assertNotIn(new_id, seen_ids)
                seen_ids.add(new_id)
            elif operation == "insert_after":
                page, new_id = insert_block(page, BlockType.PARAGRAPH, target)
                self.assertEqual(ids_of(page)[ids.index(target) + 1], new_id)
                self.assertNotIn(new_id, seen_ids)
                seen_ids.add(new_id)
            elif operation == "delete":
                page, _ = delete_block(page, target)
            elif operation == "move":
                page = move_block(page, target, rng.choice(["up", "down"]))
            else:
                page = update_block(page, target, {"text": "edited"})

            assert_dense(self, page)
            self.assertGreaterEqual(len(page.blocks), 1)
            self.assertEqual(len(set(ids_of(page))), len(page.blocks))


if __name__ == '__main__':
    unittest.main(verbosity=2)
