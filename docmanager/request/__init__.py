from .request_context import RequestContext, FlaskRequestContext, MappingRequestContext
