"""
Hugging Face Spaces deployment for the CalmaLink chat service.

This Gradio app provides a chat front end over the same service the HTTP
API uses. Practices are rendered with a link to their audio and the script.
"""
import sys
import logging
from pathlib import Path
import gradio as gr

# In Spaces, src/ sits next to this file; locally it is the repo root's src/
current_dir = Path(__file__).parent
if (current_dir / "src").exists():
    service_path = current_dir / "src"
else:
    service_path = current_dir.parent / "src"
sys.path.insert(0, str(service_path))

from calmalink.app import CalmaLinkApp
from calmalink.config_loader import load_config_from_env
from calmalink.schemas import ResponseEnvelope

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

calmalink_app: CalmaLinkApp = None


def initialize_app() -> CalmaLinkApp:
    """Initialize the chat service from environment variables."""
    global calmalink_app

    if calmalink_app is not None:
        return calmalink_app

    calmalink_app = CalmaLinkApp(load_config_from_env())
    calmalink_app.initialize()
    logger.info("CalmaLink initialized for Spaces")
    return calmalink_app


def render(envelope: ResponseEnvelope) -> str:
    """Markdown for one assistant reply."""
    if envelope.tool is None:
        return envelope.message
    result = envelope.tool.result
    return (
        f"{envelope.message}\n\n"
        f"🎧 [{result['title']}]({result['audioUrl']})\n\n"
        f"_{result['script']}_"
    )


def chat_interface(message: str, history: list) -> tuple[str, list]:
    """
    Handle one chat turn.

    :param message: User message
    :param history: Conversation so far, as role/content dicts
    :return: Cleared textbox value and updated history
    """
    if not message or not message.strip():
        return "", history

    history = list(history or [])
    history.append({"role": "user", "content": message})
    turns = [{"role": turn["role"], "content": turn["content"]} for turn in history]

    try:
        envelope = initialize_app().chat(turns)
        reply = render(envelope)
    except Exception as e:
        logger.error(f"Chat failed: {str(e)}", exc_info=True)
        reply = "Sorry, something went wrong. / Lo siento, hubo un problema."

    history.append({"role": "assistant", "content": reply})
    return "", history


with gr.Blocks(title="CalmaLink", theme=gr.themes.Soft()) as demo:
    gr.Markdown("""
    # 🌿 CalmaLink

    A bilingual (English / Español) companion for a short guided breathing practice.

    Try: **"english"**, **"español"**, **"play the meditation"**, **"show library"**, **"help"**, or just talk.
    """)

    chatbot = gr.Chatbot(label="Conversation", type="messages", height=500)
    msg = gr.Textbox(label="Message / Mensaje", placeholder="How are you feeling? / ¿Cómo te sientes?", lines=2)
    with gr.Row():
        submit_btn = gr.Button("Send", variant="primary")
        clear_btn = gr.Button("Clear")

    msg.submit(chat_interface, [msg, chatbot], [msg, chatbot])
    submit_btn.click(chat_interface, [msg, chatbot], [msg, chatbot])
    clear_btn.click(lambda: ([], ""), None, [chatbot, msg])

    gr.Markdown("""
    ### Configuration

    Set `ENABLE_LLM=true` and `OPENAI_API_KEY` (or `LLM_PROVIDER=groq` with `GROQ_API_KEY`)
    in the Space settings to enable free-form conversation. Without them the keyword
    responder answers every turn.

    If you are in crisis, call or text **988** (U.S.) or your local emergency number.
    """)


if __name__ == "__main__":
    demo.launch(
        server_name="0.0.0.0",
        server_port=7860,
        share=False
    )
