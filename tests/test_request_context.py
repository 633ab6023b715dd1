from flask import Flask

from docmanager import FlaskRequestContext, MappingRequestContext, RequestContext


def test_flask_context_reads_query_string():
    app = Flask(__name__)
    context = FlaskRequestContext()

    with app.test_request_context("/organizations?q=bob&page=2"):
        assert context.get("q") == "bob"
        assert context.get("page") == "2"
        assert context.get("per_page", 10) == 10


def test_flask_context_outside_a_request_returns_default():
    assert FlaskRequestContext().get("q", "fallback") == "fallback"


def test_mapping_context():
    context = MappingRequestContext({"q": "bob"})
    assert context.get("q") == "bob"
    assert context.get("page", 1) == 1
    assert isinstance(context, RequestContext)
