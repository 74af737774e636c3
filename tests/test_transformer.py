import unittest
import sys
import os
from datetime import datetime, timezone

# Add the parent directory to sys.path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from chat_insights.models import RawConversation, Status
from chat_insights.processing import ConversationTransformer, transform_single_chat, transform_chat_data
from chat_insights.strategies.base import ClassifierStrategy
from chat_insights.utils.clock import FixedClock

from fixtures import ts, human, ai, raw_chat


class TestTransformSingleChat(unittest.TestCase):

    def setUp(self):
        self.start = ts(2024, 3, 15, 14, 30)
        self.chat = raw_chat(
            "session-1",
            human("Fono: 56912345678 | Nombre: Juan Pérez | Mensaje: Hola, busco interruptores", self.start),
            ai("Tenemos Leviton y Schneider [Used tools: Tool: buscar_producto, Input: x]", self.start + 60),
            human("Me interesa ABB también", self.start + 120),
            ai("ABB y Leviton disponibles [Used tools: Tool: buscar_producto, Input: y, Tool: stock, Input: z]",
               self.start + 300),
        )

    def test_fields(self):
        conversation = transform_single_chat(self.chat, 0)

        self.assertEqual(conversation.id, "session-1")
        self.assertEqual(conversation.session_id, "session-1")
        self.assertEqual(conversation.client_name, "Juan Pérez")
        self.assertEqual(conversation.client_phone, "56912345678")
        self.assertEqual(conversation.initial_message, "Hola, busco interruptores")
        self.assertEqual(conversation.date, datetime(2024, 3, 15, 14, 30))
        self.assertEqual(conversation.timestamp, self.start)
        self.assertEqual(conversation.last_timestamp, self.start + 300)
        self.assertEqual(conversation.duration, 300)
        self.assertEqual(conversation.message_count, 4)
        self.assertEqual(len(conversation.messages), 4)

    def test_products_and_tools_from_ai_messages_only(self):
        conversation = transform_single_chat(self.chat, 0)
        # ABB is first named by an AI message after Leviton and Schneider
        self.assertEqual(conversation.products, ("Leviton", "Schneider", "ABB"))
        self.assertEqual(conversation.tools, ("buscar_producto", "stock"))
        self.assertEqual(len(set(conversation.products)), len(conversation.products))

    def test_human_only_products_are_ignored(self):
        chat = raw_chat("s", human("Quiero Siemens", self.start), ai("Claro", self.start + 10))
        self.assertEqual(transform_single_chat(chat, 0).products, ())

    def test_defaults_without_markers(self):
        chat = raw_chat("s", human("hola", self.start))
        conversation = transform_single_chat(chat, 0)
        self.assertEqual(conversation.client_name, "Desconocido")
        self.assertEqual(conversation.client_phone, "Sin teléfono")
        self.assertEqual(conversation.initial_message, "hola")
        self.assertEqual(conversation.status, Status.ABIERTA)

    def test_no_human_message(self):
        chat = raw_chat("s", ai("Bienvenido", self.start))
        conversation = transform_single_chat(chat, 0)
        self.assertEqual(conversation.client_name, "Desconocido")
        self.assertEqual(conversation.initial_message, "")

    def test_empty_or_missing_messages(self):
        self.assertIsNone(transform_single_chat(raw_chat("s"), 0))
        self.assertIsNone(transform_single_chat({"sessionID": "s"}, 0))
        self.assertIsNone(transform_single_chat({"sessionID": "s", "messages": None}, 0))

    def test_missing_timestamps_fall_back(self):
        now = datetime(2024, 5, 1, 10, 0)
        transformer = ConversationTransformer(clock=FixedClock(now))
        chat = raw_chat("s", human("hola"), ai("chao"))
        conversation = transformer.transform_single_chat(chat, 0)
        self.assertEqual(conversation.timestamp, now.timestamp())
        self.assertEqual(conversation.last_timestamp, now.timestamp())
        self.assertEqual(conversation.duration, 0)

    def test_missing_last_timestamp_uses_first(self):
        chat = raw_chat("s", human("hola", self.start), ai("chao"))
        conversation = transform_single_chat(chat, 0)
        self.assertEqual(conversation.last_timestamp, self.start)
        self.assertEqual(conversation.duration, 0)

    def test_missing_session_id_uses_index(self):
        conversation = transform_single_chat({"messages": [human("hola", self.start)]}, 7)
        self.assertEqual(conversation.id, "chat-7")
        self.assertIsNone(conversation.session_id)

    def test_accepts_validated_model(self):
        conversation = transform_single_chat(RawConversation.model_validate(self.chat), 0)
        self.assertEqual(conversation.id, "session-1")

    def test_timezone(self):
        conversation = transform_single_chat(self.chat, 0, tz=timezone.utc)
        self.assertEqual(conversation.date, datetime.fromtimestamp(self.start, timezone.utc))

    def test_classifier_is_injected(self):
        class Lost(ClassifierStrategy):
            def classify(self, messages):
                return Status.PERDIDA

        self.assertEqual(transform_single_chat(self.chat, 0, classifier=Lost()).status, Status.PERDIDA)

    def test_to_dict(self):
        data = transform_single_chat(self.chat, 0).to_dict()
        self.assertEqual(data["sessionID"], "session-1")
        self.assertEqual(data["clientName"], "Juan Pérez")
        self.assertEqual(data["products"], ["Leviton", "Schneider", "ABB"])
        self.assertNotIn("messages", data)


class TestTransformChatData(unittest.TestCase):

    def test_drops_invalid_records(self):
        start = ts(2024, 3, 15, 9, 0)
        chats = [
            raw_chat("a", human("hola", start)),
            raw_chat("empty"),
            "not a chat",
            {"sessionID": "bad", "messages": "nope"},
            {"sessionID": "no-type", "messages": [{"data": {"content": "x"}}]},
            raw_chat("b", human("hola", start), ai("gracias", start + 5)),
        ]
        conversations = transform_chat_data(chats)
        self.assertEqual([c.id for c in conversations], ["a", "b"])
        self.assertNotIn(None, conversations)

    def test_unusable_timestamps_skip_only_that_record(self):
        start = ts(2024, 3, 15, 9, 0)
        chats = [
            raw_chat("good", human("hola", start)),
            raw_chat("millis", human("hola", 1700000000000000)),
            raw_chat("nan", human("hola", float("nan"))),
            raw_chat("good-2", human("hola", start), ai("buenas", float("nan"))),
        ]
        with self.assertLogs("chat_insights.processing.transformer", level="WARNING") as logs:
            conversations = transform_chat_data(chats)

        self.assertEqual([c.id for c in conversations], ["good", "good-2"])
        self.assertEqual(conversations[1].duration, 0)
        self.assertEqual(sum("unusable timestamp" in line for line in logs.output), 2)

    def test_non_list_input(self):
        self.assertEqual(transform_chat_data(None), [])
        self.assertEqual(transform_chat_data({"sessionID": "a"}), [])
        self.assertEqual(transform_chat_data("chats"), [])
        self.assertEqual(transform_chat_data(42), [])

    def test_generator_input(self):
        start = ts(2024, 3, 15, 9, 0)
        chats = (raw_chat(session_id, human("hola", start)) for session_id in ["a", "b"])
        self.assertEqual([c.id for c in transform_chat_data(chats)], ["a", "b"])

    def test_statuses_are_valid(self):
        start = ts(2024, 3, 15, 9, 0)
        chats = [
            raw_chat("1", human("hola", start)),
            raw_chat("2", human("hola", start), ai("buenas", start + 1)),
            raw_chat("3", human("hola", start), human("muy caro", start + 1)),
        ]
        for conversation in transform_chat_data(chats):
            self.assertIn(conversation.status, set(Status))


if __name__ == "__main__":
    unittest.main()
