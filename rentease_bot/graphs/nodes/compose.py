from rentease_bot.core.state import TurnState
from rentease_bot.services.response_composer import compose_reply

def compose_node(state: TurnState):
    return {"result": compose_reply(state["parsed"], state.get("filters"))}
