"""Chat prompts for the developer assistant persona."""
from devstudio.models.requests import ChatRequest

CHAT_SYSTEM_PROMPT = """You are an expert AI development assistant.
You help developers by:
- Answering programming questions
- Explaining concepts
- Suggesting solutions
- Debugging code
- Proposing improvements

Be concise but complete. Use code examples when helpful."""


def get_chat_prompts(request: ChatRequest):
    system = CHAT_SYSTEM_PROMPT
    context = request.context

    if context and context.project_info:
        system += f"\n\nProject context: {context.project_info}"

    user = request.message
    if context and context.code:
        language = context.language or "unspecified"
        user += f"\n\nReference code ({language}):\n```\n{context.code}\n```"

    return system, user
