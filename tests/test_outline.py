from learnyst.services.outline import (
    MAX_TOPICS,
    count_topics,
    extract_outline,
    fallback_mind_map,
    generic_outline,
    is_heading,
)


def test_short_syllabus_has_no_outline():
    assert extract_outline("ALGEBRA\nlinear equations") == []
    assert extract_outline(None) == []


def test_three_caps_headings_with_two_subtopics_each():
    syllabus = "\n".join([
        "MECHANICS",
        "- Newton's laws of motion",
        "- Work, energy and power",
        "WAVES",
        "• Simple harmonic motion",
        "• Sound and its properties",
        "OPTICS",
        "Reflection at plane mirrors",
        "Refraction through lenses",
    ])

    topics = extract_outline(syllabus)

    assert [t.id for t in topics] == ["topic1", "topic2", "topic3"]
    assert [len(t.children) for t in topics] == [2, 2, 2]
    assert [c.id for c in topics[0].children] == ["topic1-1", "topic1-2"]
    assert topics[0].children[0].name == "Newton's laws of motion"
    assert topics[1].children[0].name == "Simple harmonic motion"


def test_algebra_geometry_scenario():
    syllabus = (
        "ALGEBRA\nSolving linear equations carefully\nQuadratic formula applications\n"
        "GEOMETRY\nTriangle congruence theorems in detail\nCircle properties and tangents"
    )

    topics = extract_outline(syllabus)

    assert [(t.id, t.name) for t in topics] == [("topic1", "ALGEBRA"), ("topic2", "GEOMETRY")]
    assert [c.id for c in topics[0].children] == ["topic1-1", "topic1-2"]
    assert [c.name for c in topics[1].children] == [
        "Triangle congruence theorems in detail",
        "Circle properties and tangents",
    ]
    assert all(not t.is_completed for t in topics)


def test_numbered_and_title_case_headings_are_cleaned():
    syllabus = "1. Cell Structure\nMembranes and organelles\nGenetics:\nMendelian inheritance patterns\n"

    topics = extract_outline(syllabus)

    assert [t.name for t in topics] == ["Cell Structure", "Genetics"]


def test_short_lines_and_preamble_are_ignored():
    syllabus = "this course covers the following units\nALGEBRA\nab\nshort one\nPolynomials and their roots\n"

    topics = extract_outline(syllabus)

    assert len(topics) == 1
    assert [c.name for c in topics[0].children] == ["Polynomials and their roots"]


def test_at_most_six_topics():
    syllabus = "\n".join(f"UNIT {chr(65 + i)}\nA sufficiently long subtopic line" for i in range(9))

    assert len(extract_outline(syllabus)) == MAX_TOPICS


def test_heading_rules():
    assert is_heading("3. Thermodynamics")
    assert is_heading("ORGANIC CHEMISTRY")
    assert is_heading("Organic Chemistry:")
    assert not is_heading("Organic chemistry basics")


def test_generic_outline_by_keyword():
    assert generic_outline("Intro to Calculus")[0].name == "Mathematical Fundamentals"
    assert generic_outline("software engineering")[0].name == "Programming Fundamentals"
    assert len(generic_outline("art history")) == 5
    assert generic_outline(None)[0].id == "introduction"


def test_fallback_mind_map_prefers_extracted_outline():
    unstructured = "we will study many things about calculus over the semester, weekly"

    assert fallback_mind_map(unstructured)[0].id == "fundamentals"


def test_count_topics_counts_every_node():
    topics = generic_outline("algebra")

    assert count_topics(topics) == 4 + 4 + 4 + 4 + 3
    assert count_topics([]) == 0
