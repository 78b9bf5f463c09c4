from agent.tools.builtin import build_builtin_tools

__all__ = ["build_builtin_tools"]
