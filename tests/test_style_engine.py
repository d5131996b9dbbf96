from cornellnotes.core.content import (
    ContentTree,
    Selection,
    StyleDescriptor,
    StyledRun,
    TextRun,
    apply_font_size,
    apply_highlight,
    apply_text_color,
    apply_weight,
    iter_styled_leaves,
)


def _tree():
    return ContentTree((TextRun("slope intercept"),))


def test_each_operation_sets_exactly_one_attribute():
    selection = Selection(0, 5)
    cases = [
        (apply_weight(_tree(), selection), StyleDescriptor(weight="700")),
        (apply_font_size(_tree(), selection, 24), StyleDescriptor(font_size_px=24)),
        (apply_text_color(_tree(), selection, "#123456"), StyleDescriptor(text_color="#123456")),
        (apply_highlight(_tree(), selection, "yellow"), StyleDescriptor(highlight_color="yellow")),
    ]
    for (tree, _), expected in cases:
        assert tree.nodes[0] == StyledRun(expected, (TextRun("slope"),))
        assert tree.nodes[1] == TextRun(" intercept")


def test_values_are_passed_through_verbatim():
    tree, _ = apply_text_color(_tree(), Selection(0, 5), "not-a-color")
    assert tree.nodes[0].style.text_color == "not-a-color"

    tree, _ = apply_font_size(_tree(), Selection(0, 5), "huge")
    assert tree.nodes[0].style.font_size_px == "huge"


def test_repeated_weight_nests_instead_of_toggling():
    tree, _ = apply_weight(_tree(), Selection(0, 5))
    tree, _ = apply_weight(tree, Selection(0, 5))

    outer = tree.nodes[0]
    assert outer.style == StyleDescriptor(weight="700")
    inner = outer.children[0]
    assert isinstance(inner, StyledRun)
    assert inner.style == StyleDescriptor(weight="700")
    assert inner.children == (TextRun("slope"),)


def test_inner_attribute_wins_over_enclosing_one():
    tree, _ = apply_font_size(_tree(), Selection(0, 15), 12)
    tree, _ = apply_font_size(tree, Selection(6, 15), 32)

    sizes = {
        leaf.node.text: leaf.style.font_size_px
        for leaf in iter_styled_leaves(tree)
        if isinstance(leaf.node, TextRun)
    }
    assert sizes == {"slope ": 12, "intercept": 32}


def test_collapsed_selection_leaves_tree_alone():
    tree = _tree()
    new_tree, _ = apply_highlight(tree, Selection(4, 4), "yellow")
    assert new_tree is tree
