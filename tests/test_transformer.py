import unittest
from pathlib import Path

from lxml import etree

from xml_echo.exceptions import (
    MalformedXmlError,
    RootOccurrenceError,
    UnexpectedRootElementError,
)
from xml_echo.parser import ParsedDocument, XmlDocumentParser
from xml_echo.transformer import RequestTransformer, TransformResult, XmlResponse

FIXTURES = Path(__file__).resolve().parent / "fixtures"


class _DuplicatedRootDocument(ParsedDocument):
    def occurrences(self, tag):
        return [self.root, self.root]


class _DuplicatingParser(XmlDocumentParser):
    def parse(self, text):
        document = super().parse(text)
        return _DuplicatedRootDocument(root=document.root, options=document.options)


class RequestTransformerTests(unittest.TestCase):
    def setUp(self):
        self.transformer = RequestTransformer()

    def test_book_scenario_is_echoed(self):
        xml = '<catalog><book id="bk101"><title>XML Guide</title></book></catalog>'
        response = self.transformer.transform(xml)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers, {"Content-Type": "text/xml"})
        self.assertEqual(response.body, xml)

    def test_response_dict_shape(self):
        response = self.transformer.transform("<catalog><book/></catalog>")
        self.assertEqual(
            response.to_dict(),
            {
                "statusCode": 200,
                "headers": {"Content-Type": "text/xml"},
                "body": "<catalog><book/></catalog>",
            },
        )

    def test_attributes_and_children_preserved(self):
        response = self.transformer.transform('<catalog id="x"><book/></catalog>')
        root = etree.fromstring(response.body.encode("utf-8"))
        self.assertEqual(root.get("id"), "x")
        self.assertEqual([child.tag for child in root], ["book"])
        self.assertIsNone(root.get("book"))

    def test_whitespace_preserved(self):
        response = self.transformer.transform("<catalog><title>  XML Guide  </title></catalog>")
        self.assertIn("<title>  XML Guide  </title>", response.body)

    def test_fixture_catalog_is_reparseable_and_idempotent(self):
        xml = (FIXTURES / "catalog.xml").read_text(encoding="utf-8")
        first = self.transformer.transform(xml)
        second = self.transformer.transform(xml)

        self.assertEqual(first.body, second.body)
        self.assertFalse(first.body.startswith("<?xml"))
        root = etree.fromstring(first.body.encode("utf-8"))
        self.assertEqual(root.xpath("count(./book)"), 2.0)
        self.assertEqual(root.xpath("./book[@id='bk102']/title/text()"), ["Midnight Rain"])

    def test_document_entities_echo_as_reparseable_text(self):
        xml = '<!DOCTYPE catalog [<!ENTITY pub "Acme">]><catalog><book>&pub;</book></catalog>'
        response = self.transformer.transform(xml)

        self.assertEqual(response.body, "<catalog><book>Acme</book></catalog>")
        etree.fromstring(response.body.encode("utf-8"))

    def test_declared_encoding_keeps_text_verbatim(self):
        xml = '<?xml version="1.0" encoding="ISO-8859-1"?><catalog><t>café</t></catalog>'
        response = self.transformer.transform(xml)
        self.assertEqual(response.body, "<catalog><t>café</t></catalog>")

    def test_malformed_xml_raises(self):
        with self.assertRaises(MalformedXmlError):
            self.transformer.transform("<a><b></a>")

    def test_unexpected_root_raises(self):
        with self.assertRaises(UnexpectedRootElementError) as ctx:
            self.transformer.transform("<library><book/></library>")
        self.assertEqual(ctx.exception.expected, "catalog")
        self.assertEqual(ctx.exception.actual, "library")

    def test_root_check_is_case_sensitive(self):
        with self.assertRaises(UnexpectedRootElementError):
            self.transformer.transform("<Catalog/>")

    def test_any_root_when_root_tag_is_none(self):
        transformer = RequestTransformer(root_tag=None)
        response = transformer.transform("<library><book/></library>")
        self.assertEqual(response.body, "<library><book/></library>")

    def test_custom_root_tag(self):
        transformer = RequestTransformer(root_tag="library")
        self.assertEqual(transformer.transform("<library/>").body, "<library/>")

    def test_more_than_one_root_occurrence_is_an_invariant_violation(self):
        transformer = RequestTransformer(parser=_DuplicatingParser())
        with self.assertRaises(RootOccurrenceError):
            transformer.transform("<catalog/>")


class TryTransformTests(unittest.TestCase):
    def setUp(self):
        self.transformer = RequestTransformer()

    def test_success_carries_only_response(self):
        result = self.transformer.try_transform("<catalog/>")
        self.assertTrue(result.ok)
        self.assertIsNone(result.error)
        self.assertEqual(result.response.body, "<catalog/>")

    def test_failure_carries_only_error(self):
        result = self.transformer.try_transform("not xml at all")
        self.assertFalse(result.ok)
        self.assertIsNone(result.response)
        self.assertIsInstance(result.error, MalformedXmlError)

    def test_result_requires_exactly_one_outcome(self):
        with self.assertRaises(ValueError):
            TransformResult()
        with self.assertRaises(ValueError):
            TransformResult(response=XmlResponse(body="<a/>"), error=MalformedXmlError("bad"))


if __name__ == "__main__":
    unittest.main()
