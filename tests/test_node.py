"""Tests for the augmented AVL node."""

import pytest
from pyrank.node import AVLNode, balance_factor, height, pick_worst, size, update, worst


class TestAVLNode:
    """Test AVLNode construction and empty-subtree helpers."""

    def test_create_node(self):
        """Test a fresh node is a valid leaf."""
        node = AVLNode(5, 5, 12)
        assert node.key == 5
        assert node.time == 5
        assert node.quality == 12
        assert node.height == 0
        assert node.size == 1
        assert node.worst is node
        assert node.left is None
        assert node.right is None

    def test_record(self):
        """Test record returns time then quality, whatever the key."""
        node = AVLNode(12, 5, 12)
        assert node.record() == (5, 12)

    def test_empty_subtree_helpers(self):
        """Test helpers on empty subtrees."""
        assert height(None) == -1
        assert size(None) == 0
        assert worst(None) is None


class TestPickWorst:
    """Test lowest-quality selection with left-to-right tie breaking."""

    def test_all_empty(self):
        """Test that only empty candidates give None."""
        assert pick_worst(None, None, None) is None

    def test_lowest_quality_wins(self):
        """Test the lowest quality is picked wherever it is."""
        a, b, c = AVLNode(1, 1, 7), AVLNode(2, 2, 3), AVLNode(3, 3, 5)
        assert pick_worst(a, b, c) is b
        assert pick_worst(None, c, a) is c

    def test_ties_prefer_leftmost(self):
        """Test left beats middle and middle beats right on equal quality."""
        a, b, c = AVLNode(1, 1, 4), AVLNode(2, 2, 4), AVLNode(3, 3, 4)
        assert pick_worst(a, b, c) is a
        assert pick_worst(None, b, c) is b
        assert pick_worst(b, c) is b


class TestUpdate:
    """Test aggregate recomputation."""

    def test_update_from_children(self):
        """Test height, size and worst are derived from children."""
        root = AVLNode(2, 2, 10)
        root.left = AVLNode(1, 1, 20)
        root.right = AVLNode(3, 3, 5)
        update(root)

        assert root.height == 1
        assert root.size == 3
        assert root.worst is root.right
        assert balance_factor(root) == 0

    def test_update_tie_prefers_left_child(self):
        """Test a left child with equal quality is chosen over the node."""
        root = AVLNode(2, 2, 10)
        root.left = AVLNode(1, 1, 10)
        update(root)
        assert root.worst is root.left
        assert balance_factor(root) == 1
