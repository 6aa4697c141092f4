from types import SimpleNamespace

from config import TrendBotConfig
from llm import TextGenerator


class RecordingLLM:
    def __init__(self, content):
        self.content = content
        self.messages = None

    def invoke(self, messages):
        self.messages = messages
        return SimpleNamespace(content=self.content)


def test_json_mode_requests_json_object():
    params = TextGenerator(api_key="k", json_mode=True)._llm_params()
    assert params["model_kwargs"] == {"response_format": TrendBotConfig.RESPONSE_FORMAT}
    assert params["model"] == TrendBotConfig.DEFAULT_MODEL
    assert params["reasoning_effort"] == TrendBotConfig.REASONING_EFFORT


def test_plain_mode_has_no_response_format():
    assert "model_kwargs" not in TextGenerator(api_key="k")._llm_params()


def test_client_is_not_built_until_used():
    generator = TextGenerator(api_key="k")
    assert generator._llm is None


def test_generate_sends_system_and_user_messages():
    generator = TextGenerator(api_key="k")
    fake = RecordingLLM("hello")
    generator._llm = fake

    assert generator.generate("be brief", "stories") == "hello"
    assert fake.messages == [("system", "be brief"), ("human", "stories")]


def test_generate_flattens_content_parts_and_empty_replies():
    generator = TextGenerator(api_key="k")
    generator._llm = RecordingLLM([{"type": "text", "text": "a"}, {"type": "text", "text": "b"}])
    assert generator.generate("s", "u") == "ab"

    generator._llm = RecordingLLM(None)
    assert generator.generate("s", "u") == ""
