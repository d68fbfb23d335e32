"""Unit tests for the record transformer."""

from domain.models import RemoteProblem
from domain.parsers.record_transformer import RecordTransformer, SectionTitles, format_multiline


def make_problem(**overrides) -> RemoteProblem:
    payload = {
        "meta": {"id": 101, "displayId": 7},
        "localizedContentsOfLocale": {
            "title": "A + B Problem",
            "contentSections": [
                {"sectionTitle": "题目描述", "text": "Add two numbers.\r\n<img src=\"http://x/a.png\">\r\n"},
                {"sectionTitle": "输入格式", "text": "  Two integers.  "},
                {"sectionTitle": "样例 1", "text": "Trivial."},
                {"sectionTitle": "提示说明", "text": "<img src='http://x/missing.png'>"},
            ],
        },
        "samples": [{"inputData": "1 2\r\n", "outputData": "3\n"}],
        "tagsOfLocale": [{"id": 1, "name": "入门"}, {"id": 2}, "junk", {"name": "数学"}],
    }
    payload.update(overrides)
    return RemoteProblem.model_validate(payload)


def test_transform_full_record():
    transformer = RecordTransformer()
    mapping = {"http://x/a.png": "./assets/7/a_1234.png"}

    record = transformer.transform(make_problem(), mapping)

    assert record.id == "7"
    assert record.title == "A + B Problem"
    assert record.difficulty == 2
    assert record.tags == ("入门", "数学")
    assert record.description == "Add two numbers.\n./assets/7/a_1234.png"
    assert record.input_format == "Two integers."
    assert record.sample_input == "1 2"
    assert record.sample_output == "3"
    assert record.sample_note == "Trivial."
    assert record.scoring == ""
    assert record.hint == "<img src='http://x/missing.png'>"


def test_transform_degrades_on_malformed_payload():
    problem = RemoteProblem.model_validate(
        {
            "meta": {"id": 1, "displayId": 3},
            "localizedContentsOfLocale": {"title": 42, "contentSections": "oops"},
            "samples": [],
            "tagsOfLocale": {"name": "not a list"},
        }
    )

    record = RecordTransformer().transform(problem, {})

    assert record.id == "3"
    assert record.title == ""
    assert record.tags == ()
    assert record.description == ""
    assert record.sample_input == ""
    assert record.sample_output == ""


def test_transform_handles_missing_localized_contents():
    problem = RemoteProblem.model_validate(
        {"meta": {"id": 1, "displayId": 4}, "localizedContentsOfLocale": None}
    )

    record = RecordTransformer().transform(problem)

    assert record.title == ""
    assert record.hint == ""


def test_extract_section_first_matching_section_wins():
    sections = [
        {"sectionTitle": "其他", "text": "x"},
        {"sectionTitle": "样例", "text": "first"},
        {"sectionTitle": "样例 1", "text": "second"},
    ]
    assert RecordTransformer.extract_section(sections, ("样例 1", "样例")) == "first"
    assert RecordTransformer.extract_section(sections, ("不存在",)) == ""


def test_extract_sample_requires_object():
    assert RecordTransformer.extract_sample(["1 2"], "inputData") == ""
    assert RecordTransformer.extract_sample(None, "inputData") == ""
    assert RecordTransformer.extract_sample([{"inputData": 5}], "inputData") == ""


def test_custom_section_titles_and_difficulty():
    titles = SectionTitles(description=("Description",))
    problem = make_problem(
        localizedContentsOfLocale={
            "title": "T",
            "contentSections": [{"sectionTitle": "Description", "text": "English"}],
        }
    )

    record = RecordTransformer(titles, difficulty=5).transform(problem)

    assert record.description == "English"
    assert record.difficulty == 5


def test_format_multiline():
    assert format_multiline("\r\n a\r\nb \r\n") == "a\nb"
    assert format_multiline("a\rb\r\nc") == "a\nb\nc"
