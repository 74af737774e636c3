import unittest
import sys
import os
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

# Add the parent directory to sys.path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from chat_insights.config import BaseConfig
from chat_insights.llm import MockLLMProvider
from chat_insights.models import RawMessage, Status
from chat_insights.strategies import (
    CLASSIFIER_STRATEGIES,
    create_classifier_strategy,
    register_classifier_strategy,
)
from chat_insights.strategies.base import ClassifierStrategy
from chat_insights.strategies.classification import KeywordClassifierStrategy, LLMClassifierStrategy

from fixtures import human, ai


def messages(*raw):
    return [RawMessage.model_validate(m) for m in raw]


class TestKeywordClassifier(unittest.TestCase):

    def setUp(self):
        self.classifier = KeywordClassifierStrategy()

    def test_single_human_message_is_open(self):
        result = self.classifier.classify(messages(
            human("Fono: 56912345678 | Nombre: Juan Pérez | Mensaje: Hola, necesito cotización")
        ))
        self.assertEqual(result, Status.ABIERTA)

    def test_win_keyword_in_last_message(self):
        result = self.classifier.classify(messages(
            human("Hola"),
            ai("Tenemos el producto"),
            human("Perfecto, muchas gracias"),
        ))
        self.assertEqual(result, Status.GANADA)

    def test_lose_keyword_in_last_message(self):
        result = self.classifier.classify(messages(
            human("Hola"),
            ai("El valor es 20.000"),
            human("No me interesa, muy caro"),
        ))
        self.assertEqual(result, Status.PERDIDA)

    def test_win_checked_before_lose(self):
        # "no gracias" is a lose keyword but "gracias" wins first
        result = self.classifier.classify(messages(human("Hola"), human("No gracias")))
        self.assertEqual(result, Status.GANADA)

    def test_long_exchange_without_keywords_is_open(self):
        result = self.classifier.classify(messages(
            human("Hola"),
            ai("Hola, buenas tardes"),
            human("Busco un enchufe"),
            ai("Hola, ¿en qué puedo ayudarle?"),
        ))
        self.assertEqual(result, Status.ABIERTA)

    def test_short_exchange_without_keywords_is_pending(self):
        result = self.classifier.classify(messages(human("Hola"), ai("Buenas tardes")))
        self.assertEqual(result, Status.PENDIENTE)

    def test_single_ai_message_is_pending(self):
        self.assertEqual(self.classifier.classify(messages(ai("Buenas tardes"))), Status.PENDIENTE)

    def test_empty_is_pending(self):
        self.assertEqual(self.classifier.classify([]), Status.PENDIENTE)

    def test_keywords_from_config(self):
        config = SimpleNamespace(WIN_KEYWORDS=["LISTO"], LOSE_KEYWORDS=["nunca"])
        classifier = KeywordClassifierStrategy(config)
        self.assertEqual(classifier.classify(messages(human("a"), ai("listo"))), Status.GANADA)
        self.assertEqual(classifier.classify(messages(human("a"), ai("nunca"))), Status.PERDIDA)
        # Default keywords no longer apply
        self.assertEqual(classifier.classify(messages(human("a"), ai("gracias"))), Status.PENDIENTE)

    def test_empty_keyword_lists_are_respected(self):
        config = SimpleNamespace(WIN_KEYWORDS=[], LOSE_KEYWORDS=[])
        classifier = KeywordClassifierStrategy(config)
        self.assertEqual(classifier.classify(messages(human("a"), ai("gracias"))), Status.PENDIENTE)


class TestLLMClassifier(unittest.TestCase):

    def test_label_from_provider(self):
        config = BaseConfig(MOCK_LLM_RESPONSE="GANADA")
        provider = MockLLMProvider(config)
        classifier = LLMClassifierStrategy(config, llm_provider=provider)

        result = classifier.classify(messages(human("Hola"), ai("Buenas tardes")))

        self.assertEqual(result, Status.GANADA)
        self.assertEqual(len(provider.prompts), 1)
        self.assertIn("Cliente: Hola", provider.prompts[0])
        self.assertIn("Asistente: Buenas tardes", provider.prompts[0])

    def test_label_embedded_in_text(self):
        classifier = LLMClassifierStrategy(BaseConfig(), llm_provider=MagicMock())
        self.assertEqual(classifier.parse_label("Etiqueta: perdida."), Status.PERDIDA)
        self.assertIsNone(classifier.parse_label("no lo sé"))
        self.assertIsNone(classifier.parse_label(None))

    def test_falls_back_to_keywords(self):
        provider = MagicMock()
        provider.retry_with_backoff = AsyncMock(return_value=None)
        classifier = LLMClassifierStrategy(BaseConfig(), llm_provider=provider)

        result = classifier.classify(messages(human("Hola"), human("ok, gracias")))

        self.assertEqual(result, Status.GANADA)
        provider.retry_with_backoff.assert_awaited_once()

    def test_provider_error_falls_back_to_keywords(self):
        provider = MagicMock()
        provider.retry_with_backoff = AsyncMock(side_effect=RuntimeError("vertexai.init failed"))
        classifier = LLMClassifierStrategy(BaseConfig(), llm_provider=provider)

        with self.assertLogs("chat_insights.strategies.classification.llm_strategy", level="ERROR"):
            result = classifier.classify(messages(human("Hola"), human("muy caro")))

        self.assertEqual(result, Status.PERDIDA)

    def test_transcript_is_truncated(self):
        config = BaseConfig(LLM_MAX_TRANSCRIPT_MESSAGES=2)
        classifier = LLMClassifierStrategy(config, llm_provider=MockLLMProvider(config))
        prompt = classifier.build_prompt(messages(human("uno"), ai("dos"), human("tres")))
        self.assertNotIn("Cliente: uno", prompt)
        self.assertIn("Asistente: dos", prompt)
        self.assertIn("Cliente: tres", prompt)

    def test_empty_conversation_skips_provider(self):
        provider = MagicMock()
        classifier = LLMClassifierStrategy(BaseConfig(), llm_provider=provider)
        self.assertEqual(classifier.classify([]), Status.PENDIENTE)
        provider.retry_with_backoff.assert_not_called()


class TestClassifierRegistry(unittest.TestCase):

    def test_create_keyword(self):
        self.assertIsInstance(create_classifier_strategy("keyword", BaseConfig()), KeywordClassifierStrategy)

    def test_create_llm_uses_configured_provider(self):
        classifier = create_classifier_strategy("llm", BaseConfig(LLM_PROVIDER="mock"))
        self.assertIsInstance(classifier, LLMClassifierStrategy)
        self.assertIsInstance(classifier.llm_provider, MockLLMProvider)

    def test_unknown_strategy(self):
        with self.assertRaises(ValueError):
            create_classifier_strategy("nope", BaseConfig())

    def test_register_strategy(self):
        class AlwaysWon(ClassifierStrategy):
            def classify(self, messages):
                return Status.GANADA

        register_classifier_strategy("always_won", AlwaysWon)
        try:
            self.assertEqual(create_classifier_strategy("always_won", None).classify([]), Status.GANADA)
        finally:
            del CLASSIFIER_STRATEGIES["always_won"]


if __name__ == "__main__":
    unittest.main()
