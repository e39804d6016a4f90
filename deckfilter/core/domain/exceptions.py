"""Base domain exceptions.

所有领域异常都应继承自 DomainException，并可以通过定义 error_code 类属性来标识错误类型。
正常的数据缺失（空字段、未解析的标签、未知排序键）不会抛异常，只有调用方的编程错误才会。
"""


class DomainException(Exception):
    """Base exception for all domain errors."""

    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str = "A domain error occurred"):
        self.message = message
        super().__init__(self.message)


class NotSupportedError(DomainException):
    """Raised when an operation is invoked where it is not implemented."""

    error_code = "NOT_SUPPORTED"
