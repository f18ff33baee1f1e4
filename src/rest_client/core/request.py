"""
Declarative request description.
"""
from typing import Any, List, Optional, Union

from ..config import ordinal
from ..parameters import find_parameter, replace_parameter, validate_header_parameter
from ..types import HttpMethod, NameComparer, Parameter, ParameterType


class RestRequest:
    """Method, resource and an ordered parameter list.

    The execution engine mutates ``parameters`` in place: client defaults
    are inserted and authenticators may add headers.
    """

    def __init__(
        self,
        resource: str = "",
        method: HttpMethod = "GET",
        parameters: Optional[List[Parameter]] = None,
        timeout: Optional[float] = None,
        parameter_name_comparer: Optional[NameComparer] = None,
    ):
        self.resource = resource
        self.method = method
        self.parameters: List[Parameter] = list(parameters) if parameters else []
        self.timeout = timeout
        self.parameter_name_comparer = parameter_name_comparer

    def __repr__(self) -> str:
        return f"RestRequest(method={self.method!r}, resource={self.resource!r}, parameters={len(self.parameters)})"

    def add_parameter(
        self,
        name: Union[str, Parameter],
        value: Any = None,
        kind: ParameterType = ParameterType.QUERY_STRING,
        validate_on_add: bool = False,
    ) -> "RestRequest":
        if isinstance(name, Parameter):
            parameter = name
        else:
            parameter = Parameter(name, value, kind, validate_on_add)
        if parameter.kind == ParameterType.HTTP_HEADER and parameter.validate_on_add:
            validate_header_parameter(parameter)
        self.parameters.append(parameter)
        return self

    def add_or_update_parameter(self, parameter: Parameter) -> "RestRequest":
        """Replace an equivalent parameter (header names ignore case) or append."""
        if parameter.kind == ParameterType.HTTP_HEADER and parameter.validate_on_add:
            validate_header_parameter(parameter)
        replace_parameter(self.parameters, parameter, self.parameter_name_comparer or ordinal)
        return self

    def add_header(self, name: str, value: str) -> "RestRequest":
        return self.add_parameter(name, value, ParameterType.HTTP_HEADER, validate_on_add=True)

    def add_query_parameter(self, name: str, value: Any) -> "RestRequest":
        return self.add_parameter(name, value, ParameterType.QUERY_STRING)

    def add_url_segment(self, name: str, value: Any) -> "RestRequest":
        return self.add_parameter(name, value, ParameterType.URL_SEGMENT)

    def add_body(self, body: Union[str, bytes], content_type: str = "text/plain") -> "RestRequest":
        return self.add_parameter(content_type, body, ParameterType.REQUEST_BODY)

    def add_json_body(self, data: Any, content_type: str = "application/json") -> "RestRequest":
        return self.add_parameter(content_type, data, ParameterType.REQUEST_BODY)

    def get_parameter(self, name: str, kind: Optional[ParameterType] = None) -> Optional[Parameter]:
        return find_parameter(self.parameters, name, kind, self.parameter_name_comparer or ordinal)
