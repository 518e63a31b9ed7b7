from __future__ import annotations

import io
import tempfile
import unittest
from contextlib import redirect_stderr
from pathlib import Path

from i18n_regen.document import OrderedMap
from i18n_regen.errors import DocumentError
from i18n_regen.pipeline import plan, regenerate
from i18n_regen.storage import load_document, save_document

from tests.fakes import FakeTranslator, translate

SOURCE = {
    "app": {
        "title": "Welcome",
        "subtitle": "Hello",
        "version": 3,
    },
    "menu": {
        "open": "Open",
        "close": "Close",
        "greeting": "Hello",
        "shortcuts": ["Ctrl+O", "Ctrl+W"],
    },
    "enabled": True,
    "missing": None,
    "farewell": "Hello",
}


def numbered_source(count: int) -> dict:
    return {f"k{i}": f"phrase {i}" for i in range(count)}


class RegenerateTests(unittest.TestCase):

    def test_second_run_is_byte_identical_and_offline(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "de.json"

            first = FakeTranslator()
            document, _ = regenerate(SOURCE, None, "de", first)
            save_document(path, document)
            first_bytes = path.read_bytes()
            self.assertGreater(len(first.calls), 0)

            second = FakeTranslator()
            document, stats = regenerate(SOURCE, load_document(path), "de", second)
            save_document(path, document)

            self.assertEqual(second.calls, [])
            self.assertEqual(stats.batches, 0)
            self.assertEqual(stats.inserted, 0)
            self.assertEqual(path.read_bytes(), first_bytes)

    def test_output_mirrors_source(self) -> None:
        document, stats = regenerate(SOURCE, None, "de", FakeTranslator())
        self.assertEqual(document.keys(), ["app", "menu", "enabled", "missing", "farewell"])
        self.assertEqual(document["menu"].keys(), ["open", "close", "greeting", "shortcuts"])
        self.assertEqual(document["app"]["title"], translate("Welcome", "de"))
        self.assertEqual(document["farewell"], translate("Hello", "de"))
        self.assertEqual(document["menu"]["shortcuts"], ["Ctrl+O", "Ctrl+W"])
        self.assertIs(document["enabled"], True)
        self.assertIsNone(document["missing"])
        self.assertEqual(document["app"]["version"], 3)
        self.assertEqual(stats.phrases, 4)
        self.assertEqual(stats.translated, 4)

    def test_repeated_phrase_sent_once(self) -> None:
        translator = FakeTranslator()
        regenerate(SOURCE, None, "de", translator)
        self.assertEqual(translator.phrases_sent.count("Hello"), 1)

    def test_order_independent_of_completion_order(self) -> None:
        translator = FakeTranslator(delays={"A": 0.1, "B": 0.05, "C": 0.0})
        document, _ = regenerate(
            {"a": "A", "b": "B", "c": "C"}, OrderedMap(), "de", translator, batch_size=1
        )
        self.assertEqual(document.keys(), ["a", "b", "c"])

    def test_incremental_run_only_translates_new_keys(self) -> None:
        existing = {"menu": {"open": "Öffnen", "greeting": "Hallo"}, "farewell": "Hallo"}
        translator = FakeTranslator()
        document, stats = regenerate(SOURCE, existing, "de", translator)

        self.assertEqual(sorted(translator.phrases_sent), ["Close", "Welcome"])
        self.assertEqual(document["menu"]["open"], "Öffnen")
        self.assertEqual(document["app"]["subtitle"], "Hallo")
        self.assertEqual(document["menu"].keys(), ["open", "close", "greeting", "shortcuts"])
        self.assertEqual(stats.reused, 2)

    def test_partial_failure_is_contained(self) -> None:
        translator = FakeTranslator(fail_on=lambda batch: "phrase 150" in batch)
        with redirect_stderr(io.StringIO()):
            document, stats = regenerate(numbered_source(200), None, "de", translator)

        for i in range(128):
            self.assertEqual(document[f"k{i}"], translate(f"phrase {i}", "de"))
        for i in range(128, 200):
            self.assertEqual(document[f"k{i}"], "Error")
        self.assertEqual(len(stats.failed), 72)
        self.assertEqual(document.keys(), [f"k{i}" for i in range(200)])

    def test_retry_failed_translates_only_marked_entries(self) -> None:
        failing = FakeTranslator(fail_on=lambda batch: "phrase 150" in batch)
        with redirect_stderr(io.StringIO()):
            document, _ = regenerate(numbered_source(200), None, "de", failing)

        retry = FakeTranslator()
        document, stats = regenerate(numbered_source(200), document, "de", retry, retry_failed=True)

        self.assertEqual(len(retry.phrases_sent), 72)
        self.assertEqual(stats.replaced, 72)
        self.assertNotIn("Error", document.values())

    def test_failed_entries_are_kept_without_retry(self) -> None:
        target = {"a": "Error"}
        translator = FakeTranslator()
        document, _ = regenerate({"a": "Hello"}, target, "de", translator)
        self.assertEqual(translator.calls, [])
        self.assertEqual(document["a"], "Error")

    def test_kept_non_phrase_values_are_not_translated_again(self) -> None:
        source = {"a": "Hello", "b": "Bye"}
        first = FakeTranslator()
        document, _ = regenerate(source, {"a": 5, "b": ""}, "de", first)
        self.assertEqual(first.calls, [])
        self.assertEqual(document.items(), [("a", 5), ("b", "")])

        second = FakeTranslator()
        document, stats = regenerate(source, document, "de", second)
        self.assertEqual(second.calls, [])
        self.assertEqual(stats.batches, 0)

    def test_source_must_be_an_object(self) -> None:
        with self.assertRaises(DocumentError):
            regenerate(["not", "an", "object"], None, "de", FakeTranslator())

    def test_non_object_target_is_replaced(self) -> None:
        with redirect_stderr(io.StringIO()) as err:
            document, _ = regenerate({"a": "Hello"}, "legacy", "de", FakeTranslator())
        self.assertEqual(document.items(), [("a", translate("Hello", "de"))])
        self.assertIn("replacing", err.getvalue())


class PlanTests(unittest.TestCase):

    def test_plan_makes_no_calls(self) -> None:
        phrases = plan(SOURCE, {"farewell": "Hallo"})
        self.assertEqual(phrases.unresolved(), ["Welcome", "Open", "Close"])
        self.assertEqual(phrases["Hello"], "Hallo")


if __name__ == "__main__":
    unittest.main()
