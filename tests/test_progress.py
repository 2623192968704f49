from learnyst.schemas.mindmap import TopicNode
from learnyst.services.progress import count_completed, summarize_progress, toggle_completion


def _tree(*leaf_states):
    return [
        TopicNode(
            id="topic1",
            name="Basics",
            children=[
                TopicNode(id=f"topic1-{i}", name=f"Leaf {i}", is_completed=state)
                for i, state in enumerate(leaf_states, start=1)
            ],
        ),
        TopicNode(id="topic2", name="Standalone"),
    ]


def test_completing_last_leaf_completes_parent():
    mind_map = toggle_completion(_tree(True, True, False), "topic1-3")

    assert mind_map[0].is_completed is True
    assert all(c.is_completed for c in mind_map[0].children)


def test_uncompleting_any_leaf_reopens_parent():
    done = toggle_completion(_tree(True, True, False), "topic1-3")

    reopened = toggle_completion(done, "topic1-2")

    assert reopened[0].is_completed is False
    assert [c.is_completed for c in reopened[0].children] == [True, False, True]


def test_toggling_parent_cascades_to_children():
    mind_map = toggle_completion(_tree(False, True, False), "topic1")

    assert mind_map[0].is_completed is True
    assert all(c.is_completed for c in mind_map[0].children)

    cleared = toggle_completion(mind_map, "topic1")
    assert not any(c.is_completed for c in cleared[0].children)


def test_toggle_does_not_mutate_input():
    original = _tree(False, False, False)

    toggle_completion(original, "topic1-1")

    assert original[0].children[0].is_completed is False


def test_leaf_without_children_keeps_its_own_flag():
    mind_map = toggle_completion(_tree(False), "topic2")

    assert mind_map[1].is_completed is True
    assert mind_map[0].is_completed is False


def test_progress_summary():
    mind_map = toggle_completion(_tree(True, False, False), "topic2")

    summary = summarize_progress(mind_map)

    assert count_completed(mind_map) == 2
    assert (summary.completed, summary.total) == (2, 5)
    assert summary.progress == 40
    assert summary.all_completed is False


def test_progress_rounds_half_up():
    mind_map = [TopicNode(id=f"t{i}", name="x", is_completed=i == 0) for i in range(8)]

    assert summarize_progress(mind_map).progress == 13


def test_empty_mind_map_progress():
    summary = summarize_progress([])

    assert (summary.completed, summary.total, summary.progress, summary.all_completed) == (0, 0, 0, False)
