# core/exceptions.py
"""
Custom exceptions for the backend
"""

class CropWiseError(Exception):
    """Base exception for CropWise backend"""
    pass

class AgentError(CropWiseError):
    """Agent-related errors"""
    pass

class AgentConfigError(CropWiseError):
    """Agent configuration errors"""
    pass

class ExternalAPIError(CropWiseError):
    """External API errors"""
    pass

class KnowledgeBaseError(CropWiseError):
    """Startup data errors - the knowledge store cannot be built"""
    pass

class OntologyError(KnowledgeBaseError):
    """Ontology document could not be parsed or yielded no crops"""
    pass

class PriceDataError(KnowledgeBaseError):
    """Market price table is missing or malformed"""
    pass
