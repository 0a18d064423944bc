from pathlib import Path

import pytest

from tagsig.modules.core.api import cycle, hover_text, hover_word, lookup, signature_for_call
from tagsig.modules.core.config import SignatureConfig
from tagsig.modules.core.cycle_state import CycleState
from tagsig.modules.core.tag_index import TagIndex

TAGS = """\
!_TAG_FILE_FORMAT\t2\t/extended format/
!_TAG_FILE_SORTED\t1\t/0=unsorted, 1=sorted, 2=foldcase/
add\tsrc/math.c\t/^int add(int a, int b)$/;"\tf\tlanguage:C\tsignature:(int a, int b)
add\tsrc/math.h\t/^int add(int a, int b);$/;"\tp\tlanguage:C\tsignature:(int a, int b)
add_all\tsrc/math.c\t/^long add_all(int *xs, int n)$/;"\tf\tlanguage:C\tsignature:(int *xs, int n)
counter\tsrc/math.c\t/^static int counter = 0;$/;"\tv\tlanguage:C
draw\tsrc/shape.py\t/^def draw(canvas):$/;"\tf\tlanguage:Python\tsignature:(canvas)
"""


@pytest.fixture
def project(tmp_path: Path) -> Path:
    (tmp_path / "tags").write_text(TAGS)
    return tmp_path


def _config(root: Path, **kw) -> SignatureConfig:
    return SignatureConfig(path_rules=[(str(root), "~")], **kw)


def test_call_shows_first_candidate_and_cycles(project: Path) -> None:
    state = CycleState()
    index = TagIndex([project / "tags"])
    config = _config(project)

    shown = signature_for_call(state, "    total = add(", index, "c", config)
    assert shown.inline == "int add(int a, int b) (1/2) ~/src/math.c"
    assert shown.tooltip == ""
    assert len(state) == 2

    assert cycle(state, "next", config).inline == "int add(int a, int b) (2/2) ~/src/math.h"
    assert cycle(state, "next", config).inline == "int add(int a, int b) (1/2) ~/src/math.c"
    assert cycle(state, "prev", config).inline.endswith("(2/2) ~/src/math.h")


def test_closing_paren_clears_state(project: Path) -> None:
    state = CycleState()
    signature_for_call(state, "add(", TagIndex([project / "tags"]), "c", _config(project))
    assert state.on_typed("1, 2") is False
    assert state.on_typed(")") is True
    assert not state
    assert cycle(state).inline == ""


def test_language_mismatch_shows_nothing(project: Path) -> None:
    state = CycleState()
    index = TagIndex([project / "tags"])
    assert not signature_for_call(state, "draw(", index, "c", _config(project))
    assert not state

    shown = signature_for_call(state, "draw(", index, "python", _config(project))
    assert shown.inline == "def draw(canvas) (1/1) ~/src/shape.py"


def test_variables_are_not_callable(project: Path) -> None:
    state = CycleState()
    assert not signature_for_call(state, "counter(", TagIndex([project / "tags"]), "c")
    assert lookup("counter", TagIndex([project / "tags"]), "c", require_callable=False)


def test_new_trigger_replaces_state(project: Path) -> None:
    state = CycleState()
    index = TagIndex([project / "tags"])
    signature_for_call(state, "add(", index, "c")
    cycle(state)
    shown = signature_for_call(state, "add_all(", index, "c", _config(project))
    assert state.cursor == 1
    assert len(state) == 1
    assert shown.inline == "long add_all(int *xs, int n) (1/1) ~/src/math.c"


def test_unextractable_text_clears_state(project: Path) -> None:
    state = CycleState()
    index = TagIndex([project / "tags"])
    signature_for_call(state, "add(", index, "c")
    assert not signature_for_call(state, "x = (", index, "c")
    assert not state


def test_paren_alone_on_its_line(project: Path) -> None:
    state = CycleState()
    shown = signature_for_call(
        state, "        (", TagIndex([project / "tags"]), "c", _config(project),
        previous_line="    total = add",
    )
    assert shown.inline.startswith("int add(int a, int b) (1/2)")


def test_missing_tags_file_degrades_to_empty(tmp_path: Path) -> None:
    state = CycleState(candidates=["stale"])
    shown = signature_for_call(state, "add(", TagIndex([tmp_path / "tags"]), "c")
    assert shown.inline == ""
    assert not state


def test_tooltip_only_and_trim(project: Path) -> None:
    state = CycleState()
    index = TagIndex([project / "tags"])

    shown = signature_for_call(state, "add(", index, "c", _config(project, tooltip_only=True))
    assert shown.inline == ""
    assert shown.tooltip.splitlines() == [
        "int add(int a, int b) (1/2) ~/src/math.c",
        "int add(int a, int b) (2/2) ~/src/math.h",
    ]

    shown = signature_for_call(state, "add(", index, "c", _config(project, display_trim=12))
    assert shown.inline == "int add(i..."


def test_hover_lists_all_kinds_with_cap(project: Path) -> None:
    index = TagIndex([project / "tags"])
    config = _config(project)
    assert hover_word("counter", index, "c", config) == "static int counter = 0 (1/1) ~/src/math.c"

    line = "x = add(1, 2);"
    assert len(hover_text(line, line.index("add"), index, "c", config).splitlines()) == 2

    capped = _config(project, max_tooltip_lines=1)
    assert hover_text(line, line.index("add"), index, "c", capped) == "int add(int a, int b) (1/2) ~/src/math.c"
    assert hover_text(line, 3, index, "c", config) == ""


def test_out_of_order_tags_are_recovered(tmp_path: Path) -> None:
    (tmp_path / "tags").write_text(
        "!_TAG_FILE_SORTED\t1\t/0=unsorted, 1=sorted/\n"
        'zeta\tz.c\t/^void zeta(void)$/;"\tf\tsignature:(void)\n'
        'add\ta.c\t/^int add(int a, int b)$/;"\tf\tsignature:(int a, int b)\n'
        'beta\tb.c\t/^void beta(void)$/;"\tf\tsignature:(void)\n'
    )
    index = TagIndex([tmp_path / "tags"])
    shown = signature_for_call(CycleState(), "add(", index, "c", _config(tmp_path))
    assert shown.inline == "int add(int a, int b) (1/1) ~/a.c"
    assert index.bsearch is True
