# src/transflow/core/exceptions.py
"""
本模块定义了 Transflow 项目中所有自定义的、语义化的异常类型。

业务异常（WorkflowError 的子类）对应调用者可以纠正的错误，各自映射到一个
独立的 HTTP 状态码；其余异常属于内部错误，统一报告为 500，绝不与
InvalidStateError 混淆。
"""


class TransflowError(Exception):
    """
    所有 Transflow 自定义异常的通用基类。
    捕获此异常可以处理所有源自本项目的预期错误。
    """

    http_status: int = 500
    code: str = "internal_error"


class ConfigurationError(TransflowError):
    """表示在加载、解析或验证配置时发生的错误。"""


class DatabaseError(TransflowError):
    """
    表示在持久化层操作（连接、查询、提交）中发生的错误。
    通常是底层 SQLAlchemy 异常的包装。
    """


class LockAcquisitionError(TransflowError):
    """在限定时间内无法获取文档锁。"""


class AuthenticationError(TransflowError):
    """凭据缺失或无效。"""

    http_status = 401
    code = "unauthenticated"


class WorkflowError(TransflowError):
    """工作流业务错误的基类。失败的动作不会留下任何部分级联。"""

    http_status = 400
    code = "workflow_error"


class NotFoundError(WorkflowError):
    """引用的文档、版本、任务、审校、用户或术语不存在。"""

    http_status = 404
    code = "not_found"


class ConflictError(WorkflowError):
    """违反唯一性不变量：重复任务、重复审校、重复术语或重复邮箱。"""

    http_status = 409
    code = "conflict"


class ForbiddenError(WorkflowError):
    """调用者不是任务的译者或审校的审校人，或缺少管理员级别。"""

    http_status = 403
    code = "forbidden"


class InvalidStateError(WorkflowError):
    """当前状态不允许该动作，或版本不属于该文档。"""

    http_status = 400
    code = "invalid_state"
