# api/deps.py
"""
Request dependencies shared by the endpoints
"""
from fastapi import Request

from agents.knowledge.store import KnowledgeStore
from core.exceptions import KnowledgeBaseError

def get_knowledge_store(request: Request) -> KnowledgeStore:
    """Knowledge store built at startup and kept on app.state"""
    store = getattr(request.app.state, "knowledge_store", None)
    if store is None:
        raise KnowledgeBaseError("Knowledge store not loaded")
    return store
