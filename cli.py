from __future__ import annotations

import argparse
import json
import os
import sys

import structlog
import uvicorn

from setup_component.log import setup_logging
from setup_component.model import SetupComponentOptions
from setup_component.plugin import SetupComponentPlugin
from setup_component.scanner import InvalidSetupComponentError
from setup_component.virtual_id import build_virtual_id, normalize_path


logger = structlog.get_logger(__name__)


def _read_module(args: argparse.Namespace):
	path = os.path.abspath(args.path)
	if not os.path.isfile(path):
		print(f"No such file: {path}", file=sys.stderr)
		sys.exit(2)
	with open(path, "r", encoding="utf-8") as fh:
		code = fh.read()
	root = os.path.abspath(args.root) if args.root else os.path.dirname(path)
	plugin = SetupComponentPlugin(SetupComponentOptions(root=root))
	try:
		result = plugin.transform(code, path)
	except InvalidSetupComponentError as e:
		print(str(e), file=sys.stderr)
		sys.exit(1)
	return plugin, path, result


def cmd_transform(args: argparse.Namespace) -> None:
	_, path, result = _read_module(args)
	if result is None:
		logger.info("No setup components found", path=path)
		print(json.dumps({"code": None, "map": None}, indent=2))
		return
	print(json.dumps(result.model_dump(), indent=2))


def cmd_compile(args: argparse.Namespace) -> None:
	plugin, path, _ = _read_module(args)
	normalized_id = normalize_path(path)
	file_context = plugin.ctx.get(normalized_id)
	count = len(file_context.components) if file_context else 0
	for index in range(count):
		virtual_id = build_virtual_id(normalized_id, index)
		print(f"<!-- {virtual_id} -->")
		print(plugin.load(virtual_id))


def cmd_serve(args: argparse.Namespace) -> None:
	if args.root:
		os.environ["SETUP_COMPONENT_ROOT"] = os.path.abspath(args.root)
	uvicorn.run("api:app", host=args.host, port=args.port, reload=args.reload)


def main() -> None:
	parser = argparse.ArgumentParser(prog="setupc")
	parser.add_argument("--log-level", default="WARNING")
	parser.add_argument("--log-json", action="store_true")
	sub = parser.add_subparsers(dest="cmd", required=True)

	pt = sub.add_parser("transform", help="Transform a module and print code and source map JSON")
	pt.add_argument("path", help="Path to the module")
	pt.add_argument("--root", help="Project root (defaults to the module's directory)")
	pt.set_defaults(func=cmd_transform)

	pc = sub.add_parser("compile", help="Print the synthetic single-file components of a module")
	pc.add_argument("path", help="Path to the module")
	pc.add_argument("--root", help="Project root (defaults to the module's directory)")
	pc.set_defaults(func=cmd_compile)

	ps = sub.add_parser("serve", help="Run the HTTP bridge")
	ps.add_argument("--host", default="127.0.0.1")
	ps.add_argument("--port", type=int, default=8000)
	ps.add_argument("--root", help="Project root")
	ps.add_argument("--reload", action="store_true")
	ps.set_defaults(func=cmd_serve)

	args = parser.parse_args()
	setup_logging(args.log_level, json_output=args.log_json)
	args.func(args)


if __name__ == "__main__":
	main()
