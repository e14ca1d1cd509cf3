"""Tests for Qwen message projection."""

from conftest import make_message

from qwen_export.messages import build_qwen_message, format_model_name, resolve_model_slug
from qwen_export.model import AssistantMessage, QualifyingNode, UserMessage


class TestFormatModelName:
    def test_hyphen_and_underscore_segments(self):
        assert format_model_name("gpt-4-turbo") == "Gpt 4 Turbo"
        assert format_model_name("gpt-4o") == "Gpt 4o"
        assert format_model_name("text_davinci-002") == "Text Davinci 002"

    def test_rest_of_segment_unchanged(self):
        assert format_model_name("o1-miniPreview") == "O1 MiniPreview"

    def test_missing_slug(self):
        assert format_model_name(None) is None
        assert format_model_name("") is None


class TestResolveModelSlug:
    def test_metadata_slug_preferred(self):
        assert resolve_model_slug(make_message("assistant", model_slug="gpt-4o"), "gpt-4") == "gpt-4o"

    def test_default_used(self):
        assert resolve_model_slug(make_message("assistant"), "gpt-4") == "gpt-4"

    def test_nothing_available(self):
        assert resolve_model_slug({"metadata": None}, None) is None


class TestBuildQwenMessage:
    """User and assistant messages have different shapes."""

    def test_assistant_shape(self):
        node = QualifyingNode(
            node_id="n2",
            message=make_message("assistant", ["hello"], message_id="m2", create_time="1700000000.9"),
            role="assistant",
            text="hello",
            parent_node_id="n1",
            children_node_ids=["n3"],
        )
        id_of = {"n1": "m1", "n2": "m2", "n3": "m3"}
        message = build_qwen_message(node, id_of, "gpt-4-turbo")

        assert isinstance(message, AssistantMessage)
        data = message.to_dict()
        assert data["id"] == "m2"
        assert data["content"] == ""
        assert data["content_list"] == [
            {
                "content": "hello",
                "phase": "answer",
                "status": "finished",
                "extra": None,
                "role": "assistant",
                "usage": None,
            }
        ]
        assert data["model"] == "gpt-4-turbo"
        assert data["modelName"] == "Gpt 4 Turbo"
        assert data["parentId"] == "m1"
        assert data["childrenIds"] == ["m3"]
        assert data["timestamp"] == 1700000000
        assert data["done"] is True

    def test_assistant_without_model(self):
        node = QualifyingNode("n", make_message("assistant", ["x"]), "assistant", "x")
        data = build_qwen_message(node, {"n": "n"}).to_dict()
        assert data["model"] is None
        assert data["modelName"] is None

    def test_user_shape(self):
        node = QualifyingNode("u", make_message("user", ["hi"], model_slug="gpt-4o"), "user", "hi")
        message = build_qwen_message(node, {"u": "u"}, None)

        assert isinstance(message, UserMessage)
        data = message.to_dict()
        assert data["role"] == "user"
        assert data["content"] == "hi"
        assert data["models"] == ["gpt-4o"]
        assert data["parentId"] is None
        assert data["childrenIds"] == []
        assert data["files"] == []
        assert data["timestamp"] is None

    def test_user_without_model(self):
        node = QualifyingNode("u", make_message("user", ["hi"]), "user", "hi")
        assert build_qwen_message(node, {"u": "u"}).models == []

    def test_message_id_falls_back_to_node_id(self):
        node = QualifyingNode("node-7", make_message("user", ["hi"]), "user", "hi")
        assert node.message_id == "node-7"
        assert build_qwen_message(node, {}).id == "node-7"
