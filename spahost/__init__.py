"""SPAフォールバック対応の静的ファイルサーバー"""

__version__ = "0.1.0"

SERVER_NAME = "spahost"
