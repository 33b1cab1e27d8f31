"""常量定义：HTTP 状态码别名与资源存储的固定约定。"""

HTTP_STATUS_OK = 200
HTTP_STATUS_BAD_REQUEST = 400
HTTP_STATUS_NOT_FOUND = 404
HTTP_STATUS_PAYLOAD_TOO_LARGE = 413
HTTP_STATUS_INTERNAL_SERVER_ERROR = 500

# "default" 分类即存储根目录本身
DEFAULT_CATEGORY = "default"

MIME_SVG = "image/svg+xml"
MIME_PNG = "image/png"
MIME_OCTET_STREAM = "application/octet-stream"

EXTENSION_MIME_TYPES = {
    ".svg": MIME_SVG,
    ".png": MIME_PNG,
}

# 客户端未声明或声明为通用类型时，仅以扩展名判定
GENERIC_MIME_TYPES = frozenset({"", MIME_OCTET_STREAM})

# 上传时写入的临时文件前缀，列表时隐藏，且不允许作为资源名
TEMP_FILE_PREFIX = ".~upload-"
