from tagsig.modules.core.tag_record import TagRecord, parse_tag_line


def test_parse_function_with_fields() -> None:
    line = "add\t/home/u/src/m.c\t/^int add(int a, int b)$/;\"\tf\tlanguage:C\tsignature:(int a, int b)"
    record = parse_tag_line(line)
    assert record is not None
    assert record.name == "add"
    assert record.filename == "/home/u/src/m.c"
    assert record.cmd == "/^int add(int a, int b)$/"
    assert record.kind == "function"
    assert record.language == "C"
    assert record.signature == "(int a, int b)"
    assert record.pattern_text == "int add(int a, int b)"
    assert not record.has_line_locator


def test_parse_line_number_locator() -> None:
    record = parse_tag_line("main\tm.c\t42;\"\tf")
    assert record is not None
    assert record.cmd == "42"
    assert record.has_line_locator
    assert record.pattern_text is None


def test_parse_unescapes_pattern() -> None:
    record = parse_tag_line('path\tp.c\t/^char *path = "a\\/b";$/;"\tv')
    assert record is not None
    assert record.kind == "variable"
    assert record.pattern_text == 'char *path = "a/b";'


def test_parse_long_kind_and_owner() -> None:
    line = "draw\tshape.h\t/^  void draw(int x);$/;\"\tkind:member\tclass:Shape\taccess:public"
    record = parse_tag_line(line)
    assert record is not None
    assert record.kind == "member"
    assert record.class_ == "Shape"
    assert record.owner == ("class", "Shape")
    assert record.extras["access"] == "public"
    assert record.to_dict()["class"] == "Shape"


def test_parse_without_kind() -> None:
    record = parse_tag_line("FOO\ta.h\t/^#define FOO 1$/")
    assert record is not None
    assert record.kind is None
    assert record.pattern_text == "#define FOO 1"


def test_headers_and_malformed_lines_are_skipped() -> None:
    assert parse_tag_line("!_TAG_FILE_SORTED\t1\t/0=unsorted, 1=sorted/") is None
    assert parse_tag_line("justaname") is None
    assert parse_tag_line("") is None


def test_owner_prefers_class_then_struct() -> None:
    record = TagRecord(name="x", filename="a.c", cmd="1", struct="point")
    assert record.owner == ("struct", "point")
    assert TagRecord(name="x", filename="a.c", cmd="1").owner is None
