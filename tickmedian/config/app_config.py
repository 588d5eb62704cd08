#!filepath: tickmedian/config/app_config.py
import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError

from .log_config import LogConfig
from .main_config import MainConfig
from tickmedian.utils.errors import ConfigError

DEFAULT_OUTPUT_DIR = "output"


def package_root() -> Path:
    """
    返回包目录（基于当前文件位置推导）:
    tickmedian/config/app_config.py → tickmedian/config → tickmedian
    """
    return Path(__file__).resolve().parents[1]


def default_config_path() -> Path:
    env_path = os.getenv("TICKMEDIAN_CONFIG")
    if env_path:
        return Path(env_path)
    return package_root() / "config" / "base.yml"


class AppConfig(BaseModel):
    log: LogConfig = LogConfig()
    main: MainConfig

    @classmethod
    def load(cls, path: str | Path | None = None) -> "AppConfig":
        """
        加载 YAML 配置 + .env
        - 默认使用 tickmedian/config/base.yml（或 $TICKMEDIAN_CONFIG）
        - 不依赖当前工作目录：相对路径一律相对配置文件所在目录解析
        - 所有失败统一转换为 ConfigError
        """
        path = Path(path) if path is not None else default_config_path()

        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")

        base_dir = path.resolve().parent

        # 1) .env（与配置文件同目录，存在才加载）
        load_dotenv(base_dir / ".env")

        # 2) 读取 YAML
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"YAML parse error in {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e

        if not isinstance(raw, dict):
            raise ConfigError(f"Config root must be a mapping: {path}")
        if not isinstance(raw.get("main"), dict):
            raise ConfigError(f"Missing [main] section in config: {path}")

        # 3) env 覆盖
        main = dict(raw["main"])
        if os.getenv("TICKMEDIAN_INPUT"):
            main["input"] = os.getenv("TICKMEDIAN_INPUT")
        if os.getenv("TICKMEDIAN_OUTPUT"):
            main["output"] = os.getenv("TICKMEDIAN_OUTPUT")
        raw["main"] = main

        try:
            cfg = cls(**raw)
        except ValidationError as e:
            raise ConfigError(f"Config error in {path}:\n{e}") from e

        return cfg.resolve_paths(base_dir)

    def resolve_paths(self, base_dir: Path) -> "AppConfig":
        """
        默认值只在启动时解析一次：
          - input / output 相对 base_dir
          - output 缺省 → <base_dir>/output
          - log.dir 相对 base_dir
        """
        main = self.main
        output = main.output if main.output is not None else Path(DEFAULT_OUTPUT_DIR)

        resolved_main = main.model_copy(
            update={
                "input": _absolute(main.input, base_dir),
                "output": _absolute(output, base_dir),
            }
        )
        resolved_log = self.log.model_copy(
            update={"dir": str(_absolute(Path(self.log.dir), base_dir))}
        )
        return self.model_copy(update={"main": resolved_main, "log": resolved_log})

    @property
    def output_file(self) -> Path:
        return self.main.output / self.main.output_name


def _absolute(p: Path, base_dir: Path) -> Path:
    p = p.expanduser()
    return p if p.is_absolute() else (base_dir / p)
