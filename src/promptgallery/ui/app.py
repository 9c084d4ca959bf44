"""Gradio UI for Prompt Gallery."""

import logging

import gradio as gr

from promptgallery.core.config import PromptGalleryConfig, load_config

from .gateway_client import GatewayClient
from .handlers import READY_MESSAGE, generate_image, update_prompt
from .state import cleanup_controller

logger = logging.getLogger(__name__)


def create_ui(gateway: GatewayClient, config: PromptGalleryConfig | None = None) -> gr.Blocks:
    """Create the Gradio page.

    Args:
        gateway: Client shared by every session's controller
        config: Used for the page title and prompt length limit

    Returns:
        Gradio Blocks app (not yet launched or mounted)
    """
    title = config.ui_title if config else "Prompt Gallery"
    max_length = config.max_prompt_length if config else None

    app = gr.Blocks(title=title)

    with app:
        # Session state - one controller per browser session, created lazily
        session = gr.State(None, delete_callback=cleanup_controller)

        gr.Markdown(
            f"""
            # {title}
            ### Describe an image, generate it, and keep a running gallery
            """
        )

        with gr.Row():
            with gr.Column(scale=1):
                prompt_input = gr.Textbox(
                    label="Prompt",
                    placeholder="a red bicycle leaning against a brick wall",
                    lines=3,
                    max_length=max_length,
                )
                generate_btn = gr.Button("Generate", variant="primary", interactive=False)
                status_output = gr.Markdown(value=READY_MESSAGE)

            with gr.Column(scale=1):
                current_image = gr.Image(
                    label="Latest image",
                    type="filepath",
                    height=400,
                    interactive=False,
                )

        gr.Markdown("### History")
        history_gallery = gr.Gallery(
            label="Previously generated",
            columns=4,
            height=400,
            object_fit="cover",
            show_label=False,
        )

        gr.Markdown("*Images are kept for this session only.*")

        # Prompt edits keep the controller in sync and toggle the button
        def prompt_wrapper(prompt, controller):
            return update_prompt(prompt, controller, gateway)

        prompt_input.change(
            fn=prompt_wrapper,
            inputs=[prompt_input, session],
            outputs=[session, generate_btn],
        )

        # Generate button and Enter in the textbox share one handler
        async def generate_wrapper(prompt, controller):
            async for outputs in generate_image(prompt, controller, gateway):
                yield outputs

        generation_outputs = [
            current_image,
            history_gallery,
            status_output,
            generate_btn,
            session,
        ]
        generate_btn.click(
            fn=generate_wrapper,
            inputs=[prompt_input, session],
            outputs=generation_outputs,
            api_name="generate",
        )
        prompt_input.submit(
            fn=generate_wrapper,
            inputs=[prompt_input, session],
            outputs=generation_outputs,
        )

    return app


def main():
    """Launch the UI alone, talking to a gateway at ``PROMPTGALLERY_GATEWAY_URL``."""
    config = load_config()
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    gateway_url = config.resolved_gateway_url()
    logger.info(f"Starting Prompt Gallery UI against gateway {gateway_url}")

    gateway = GatewayClient(gateway_url, timeout=config.upstream_timeout + 30)
    app = create_ui(gateway, config)

    app.launch(
        server_name=config.server_host,
        server_port=config.ui_server_port,
        show_error=True,
        inbrowser=False,
    )


if __name__ == "__main__":
    main()
