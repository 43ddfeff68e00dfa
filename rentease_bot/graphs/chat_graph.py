from langgraph.graph import StateGraph, END
from rentease_bot.core.state import TurnState
from rentease_bot.graphs.nodes.window import window_node
from rentease_bot.graphs.nodes.completion import completion_node
from rentease_bot.graphs.nodes.extraction import parse_node, sanitize_node
from rentease_bot.graphs.nodes.compose import compose_node

# --- BUILD THE GRAPH ---
workflow = StateGraph(TurnState)

# Add Nodes
workflow.add_node("build_window", window_node)
workflow.add_node("completion", completion_node)
workflow.add_node("parse", parse_node)
workflow.add_node("sanitize", sanitize_node)
workflow.add_node("compose", compose_node)

# Add Edges (strictly linear: one model call per turn)
workflow.set_entry_point("build_window")
workflow.add_edge("build_window", "completion")
workflow.add_edge("completion", "parse")
workflow.add_edge("parse", "sanitize")
workflow.add_edge("sanitize", "compose")
workflow.add_edge("compose", END)

_graph = None

def get_chat_graph():
    """
    Compiled once and shared. No checkpointer: a turn keeps no state after it returns.
    """
    global _graph
    if _graph is None:
        _graph = workflow.compile()
    return _graph
