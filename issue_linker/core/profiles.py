"""
注释风格定义

语言标识到注释分隔符的映射，以及文件扩展名到语言标识的映射。
语言标识沿用编辑器的 languageId 命名（javascript、typescriptreact、shellscript ...）。
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class CommentStyle(Enum):
    """注释风格"""
    C_FAMILY = "c_family"      # // 和 /* */，' 只作字符字面量
    SCRIPT = "script"          # // 和 /* */，' 为字符串
    CSS = "css"                # 仅 /* */
    HASH = "hash"              # #
    SQL = "sql"                # -- 和 /* */
    LUA = "lua"                # -- 和 --[[ ]]
    HASKELL = "haskell"        # -- 和 {- -}
    PERCENT = "percent"        # %
    SEMICOLON = "semicolon"    # ;
    INI = "ini"                # ; 和 #
    MARKUP = "markup"          # <!-- -->
    DEFAULT = "default"        # 未知语言的启发式回退


@dataclass(frozen=True)
class CommentProfile:
    """
    一种注释风格的分隔符集合

    Attributes:
        style: 所属风格
        line_prefixes: 行注释前缀
        block_delimiters: 块注释 (开始, 结束) 分隔符对
        string_quotes: 字符串引号，块扫描时跳过字符串内容
        char_quotes: 字符字面量引号，最多包含两个字符（含转义）
    """
    style: CommentStyle
    line_prefixes: tuple[str, ...] = ()
    block_delimiters: tuple[tuple[str, str], ...] = ()
    string_quotes: tuple[str, ...] = ()
    char_quotes: tuple[str, ...] = ()

    @property
    def has_blocks(self) -> bool:
        return bool(self.block_delimiters)


PROFILES: dict[CommentStyle, CommentProfile] = {
    CommentStyle.C_FAMILY: CommentProfile(
        CommentStyle.C_FAMILY,
        line_prefixes=("//",),
        block_delimiters=(("/*", "*/"),),
        string_quotes=('"', "`"),
        char_quotes=("'",),
    ),
    CommentStyle.SCRIPT: CommentProfile(
        CommentStyle.SCRIPT,
        line_prefixes=("//",),
        block_delimiters=(("/*", "*/"),),
        string_quotes=('"', "'", "`"),
    ),
    CommentStyle.CSS: CommentProfile(
        CommentStyle.CSS,
        block_delimiters=(("/*", "*/"),),
        string_quotes=('"', "'"),
    ),
    CommentStyle.HASH: CommentProfile(CommentStyle.HASH, line_prefixes=("#",)),
    CommentStyle.SQL: CommentProfile(
        CommentStyle.SQL,
        line_prefixes=("--",),
        block_delimiters=(("/*", "*/"),),
        string_quotes=("'", '"'),
    ),
    # --[[ 必须排在 -- 之前匹配
    CommentStyle.LUA: CommentProfile(
        CommentStyle.LUA,
        line_prefixes=("--",),
        block_delimiters=(("--[[", "]]"),),
        string_quotes=('"', "'"),
    ),
    CommentStyle.HASKELL: CommentProfile(
        CommentStyle.HASKELL,
        line_prefixes=("--",),
        block_delimiters=(("{-", "-}"),),
        string_quotes=('"',),
    ),
    CommentStyle.PERCENT: CommentProfile(CommentStyle.PERCENT, line_prefixes=("%",)),
    CommentStyle.SEMICOLON: CommentProfile(CommentStyle.SEMICOLON, line_prefixes=(";",)),
    CommentStyle.INI: CommentProfile(CommentStyle.INI, line_prefixes=(";", "#")),
    CommentStyle.MARKUP: CommentProfile(
        CommentStyle.MARKUP,
        block_delimiters=(("<!--", "-->"),),
    ),
    CommentStyle.DEFAULT: CommentProfile(
        CommentStyle.DEFAULT,
        line_prefixes=("//", "#", "/*", "*", "*/", "--", "%"),
    ),
}

# 语言标识到注释风格的映射
LANGUAGE_STYLES: dict[str, CommentStyle] = {
    # C 家族，' 是字符字面量（Rust 中还是生命周期标记）
    "c": CommentStyle.C_FAMILY,
    "cpp": CommentStyle.C_FAMILY,
    "csharp": CommentStyle.C_FAMILY,
    "java": CommentStyle.C_FAMILY,
    "kotlin": CommentStyle.C_FAMILY,
    "scala": CommentStyle.C_FAMILY,
    "go": CommentStyle.C_FAMILY,
    "rust": CommentStyle.C_FAMILY,
    "swift": CommentStyle.C_FAMILY,
    "objective-c": CommentStyle.C_FAMILY,
    # 脚本类，' 和 ` 都是字符串
    "javascript": CommentStyle.SCRIPT,
    "javascriptreact": CommentStyle.SCRIPT,
    "typescript": CommentStyle.SCRIPT,
    "typescriptreact": CommentStyle.SCRIPT,
    "dart": CommentStyle.SCRIPT,
    "php": CommentStyle.SCRIPT,
    "groovy": CommentStyle.SCRIPT,
    "scss": CommentStyle.SCRIPT,
    "less": CommentStyle.SCRIPT,
    "jsonc": CommentStyle.SCRIPT,
    "css": CommentStyle.CSS,
    # # 注释
    "python": CommentStyle.HASH,
    "shellscript": CommentStyle.HASH,
    "ruby": CommentStyle.HASH,
    "perl": CommentStyle.HASH,
    "r": CommentStyle.HASH,
    "yaml": CommentStyle.HASH,
    "toml": CommentStyle.HASH,
    "dockerfile": CommentStyle.HASH,
    "makefile": CommentStyle.HASH,
    "powershell": CommentStyle.HASH,
    "coffeescript": CommentStyle.HASH,
    "elixir": CommentStyle.HASH,
    "julia": CommentStyle.HASH,
    "nim": CommentStyle.HASH,
    # -- 注释
    "sql": CommentStyle.SQL,
    "lua": CommentStyle.LUA,
    "haskell": CommentStyle.HASKELL,
    # 其他
    "latex": CommentStyle.PERCENT,
    "tex": CommentStyle.PERCENT,
    "matlab": CommentStyle.PERCENT,
    "erlang": CommentStyle.PERCENT,
    "clojure": CommentStyle.SEMICOLON,
    "lisp": CommentStyle.SEMICOLON,
    "scheme": CommentStyle.SEMICOLON,
    "ini": CommentStyle.INI,
    "html": CommentStyle.MARKUP,
    "xml": CommentStyle.MARKUP,
    "markdown": CommentStyle.MARKUP,
}

# 文件扩展名到语言标识的映射
EXTENSION_TO_LANGUAGE: dict[str, str] = {
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".jsx": "javascriptreact",
    ".ts": "typescript",
    ".mts": "typescript",
    ".tsx": "typescriptreact",
    ".c": "c",
    ".h": "c",
    ".cpp": "cpp",
    ".cc": "cpp",
    ".cxx": "cpp",
    ".hpp": "cpp",
    ".cs": "csharp",
    ".java": "java",
    ".kt": "kotlin",
    ".kts": "kotlin",
    ".scala": "scala",
    ".go": "go",
    ".rs": "rust",
    ".swift": "swift",
    ".dart": "dart",
    ".php": "php",
    ".m": "objective-c",
    ".groovy": "groovy",
    ".css": "css",
    ".scss": "scss",
    ".less": "less",
    ".jsonc": "jsonc",
    ".py": "python",
    ".pyi": "python",
    ".sh": "shellscript",
    ".bash": "shellscript",
    ".zsh": "shellscript",
    ".rb": "ruby",
    ".pl": "perl",
    ".r": "r",
    ".yml": "yaml",
    ".yaml": "yaml",
    ".toml": "toml",
    ".ps1": "powershell",
    ".coffee": "coffeescript",
    ".ex": "elixir",
    ".exs": "elixir",
    ".jl": "julia",
    ".nim": "nim",
    ".sql": "sql",
    ".lua": "lua",
    ".hs": "haskell",
    ".tex": "latex",
    ".erl": "erlang",
    ".clj": "clojure",
    ".lisp": "lisp",
    ".scm": "scheme",
    ".ini": "ini",
    ".cfg": "ini",
    ".html": "html",
    ".htm": "html",
    ".xml": "xml",
    ".md": "markdown",
}

# 无扩展名的特殊文件
FILENAME_TO_LANGUAGE: dict[str, str] = {
    "Dockerfile": "dockerfile",
    "Makefile": "makefile",
    "GNUmakefile": "makefile",
}

# 未识别的语言使用的标识
PLAINTEXT = "plaintext"


def get_profile(language_id: str) -> CommentProfile:
    """按语言标识选择注释风格，未知语言回退到 DEFAULT"""
    style = LANGUAGE_STYLES.get(language_id, CommentStyle.DEFAULT)
    return PROFILES[style]


def detect_language(file_name: str) -> str:
    """根据文件名推断语言标识"""
    if file_name in FILENAME_TO_LANGUAGE:
        return FILENAME_TO_LANGUAGE[file_name]
    dot = file_name.rfind(".")
    if dot <= 0:
        return PLAINTEXT
    return EXTENSION_TO_LANGUAGE.get(file_name[dot:].lower(), PLAINTEXT)


def _string_pattern(quote: str) -> str:
    q = re.escape(quote)
    if quote == "`":
        # 模板字符串可以跨行
        return rf"{q}(?:\\.|[^{q}\\])*{q}"
    return rf"{q}(?:\\.|[^{q}\\\r\n])*{q}"


def _char_pattern(quote: str) -> str:
    # 只收一到两个字符，未配对的 ' 不会吞掉后面的注释
    q = re.escape(quote)
    return rf"{q}(?:\\.|[^{q}\\\r\n]){{1,2}}{q}"


def build_block_pattern(profile: CommentProfile) -> Optional[re.Pattern]:
    """
    为带块注释的风格构建整篇扫描用的正则

    分支顺序：字符串 → 块注释 → 行注释。只有 ``comment`` 分组命中才是注释；
    未闭合的块注释一直延伸到文档末尾。

    Returns:
        编译后的正则；仅行注释的风格返回 None
    """
    if not profile.has_blocks:
        return None

    comment_parts = []
    for opener, closer in profile.block_delimiters:
        comment_parts.append(rf"{re.escape(opener)}.*?(?:{re.escape(closer)}|\Z)")
    for prefix in profile.line_prefixes:
        comment_parts.append(rf"{re.escape(prefix)}[^\r\n]*")

    alternatives = [_string_pattern(q) for q in profile.string_quotes]
    alternatives.extend(_char_pattern(q) for q in profile.char_quotes)
    alternatives.append("(?P<comment>" + "|".join(comment_parts) + ")")
    return re.compile("|".join(alternatives), re.DOTALL)


# 预编译，正则对象本身无状态，可安全共享
BLOCK_PATTERNS: dict[CommentStyle, Optional[re.Pattern]] = {
    style: build_block_pattern(profile) for style, profile in PROFILES.items()
}
