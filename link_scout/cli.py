#!/usr/bin/env python3
# === FILE: link_scout/cli.py ===
"""
Точка входа для запуска проверки ссылок LinkScout через командную строку.

Команды:
  check     Проверить дерево контента и вывести/сохранить отчёты
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (только stderr, если не указан)
  --log-format FORMAT Формат логирования

Команда check опции:
  --json PATH         Сохранить JSON-отчёт в файл
  --html PATH         Сохранить HTML-отчёт в файл
  --template DIR      Папка с Jinja2-шаблонами (по умолчанию встроенный шаблон)
  --pretty            Преформатировать JSON-вывод (отступ 2)
  --timeout SEC       Таймаут всей проверки (секунд)
  --strict            Код выхода 2, если найдены битые ссылки

Пример:
  link-scout --config configs/default.yaml check --json links.json --pretty
"""
import asyncio
import sys
from pathlib import Path

import click

from link_scout import __version__
from link_scout.config import load_config
from link_scout.logger import init_logging
from link_scout.report.html_report import render_html
from link_scout.report.json_report import render_json
from link_scout.scanner import start_check

CONTEXT_SETTINGS = dict(help_option_names=["--help"])

EXIT_FINDINGS = 2


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='LinkScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default='configs/default.yaml',
    show_default=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд LinkScout CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('check', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-отчёт в файл'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Папка с Jinja2-шаблонами'
)
@click.option(
    '--pretty', is_flag=True,
    help='Преформатировать JSON-вывод (отступ 2)'
)
@click.option(
    '--timeout', 'check_timeout',
    type=float,
    default=None,
    help='Таймаут всей проверки (секунд)'
)
@click.option(
    '--strict', is_flag=True,
    help='Завершиться с кодом 2, если найдены битые ссылки'
)
@click.pass_context
def check(ctx, json_output, html_output, template_dir, pretty, check_timeout, strict):
    """Проверить ссылки и сгенерировать отчёты."""
    cfg = ctx.obj['config']
    click.echo(f'Checking links for: {cfg.domain}', err=True)
    try:
        if check_timeout:
            report = asyncio.run(
                asyncio.wait_for(start_check(cfg), timeout=check_timeout)
            )
        else:
            report = asyncio.run(start_check(cfg))
    except asyncio.TimeoutError:
        print_error(f'Проверка не завершена за {check_timeout} секунд')
    except Exception as e:
        print_error(f'Ошибка при проверке: {e}')

    for message in report.messages:
        click.echo(message, err=True)

    # Если не сохраняем в файл, печатаем в stdout
    if not json_output and not html_output:
        click.echo(report.json(pretty=pretty))

    # JSON-отчёт
    if json_output:
        try:
            saved_json = render_json(report, json_output)
            click.echo(f'JSON report: {saved_json}')
        except Exception as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    # HTML-отчёт
    if html_output:
        try:
            saved_html = render_html(report, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')

    if strict and report.has_findings:
        sys.exit(EXIT_FINDINGS)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
