#!filepath: tickmedian/cli.py
from pathlib import Path
from typing import Optional

import typer
from rich import print
from rich.markup import escape

from tickmedian import __version__
from tickmedian.config.app_config import AppConfig
from tickmedian.utils.errors import MedianPipelineError
from tickmedian.utils.logger import logs

app = typer.Typer(help="Running price median change-log CLI")


@app.command()
def version():
    print(f"v{__version__}")


@app.command()
def run(
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="path to config YAML (default: tickmedian/config/base.yml)"
    ),
):
    """
    读取 input 目录下的 *.csv，按 receive_ts 排序后输出 running median change log
    """
    from tickmedian.workflows.median_workflow import run_median

    try:
        cfg = AppConfig.load(config)
        logs.configure(cfg.log)

        print(f"[green]Running median pipeline: {escape(str(cfg.main.input))}[/green]")
        ctx = run_median(cfg)
    except MedianPipelineError as e:
        # 预期内错误：不打印 traceback
        print(f"[red]{type(e).__name__}: {escape(str(e))}[/red]")
        raise typer.Exit(code=e.exit_code)

    if ctx.output_written:
        print(f"[blue]{ctx.emitted} rows -> {escape(str(ctx.output_file))}[/blue]")
    else:
        print("[yellow]no input records, output not created[/yellow]")


if __name__ == "__main__":
    app()

# python -m tickmedian.cli run --config tickmedian/config/base.yml
