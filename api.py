from __future__ import annotations

import os
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from setup_component.log import setup_logging
from setup_component.model import HotUpdateContext, ModuleNode, SetupComponentOptions, TransformResult
from setup_component.plugin import SetupComponentPlugin
from setup_component.scanner import InvalidSetupComponentError


class TransformRequest(BaseModel):
	code: str
	id: str


class TransformResponse(BaseModel):
	code: Optional[str] = None
	map: Optional[dict] = None


class IdRequest(BaseModel):
	id: str


class ResolveResponse(BaseModel):
	id: Optional[str] = None


class LoadResponse(BaseModel):
	code: Optional[str] = None


class ModulePayload(BaseModel):
	id: Optional[str] = None
	file: Optional[str] = None
	imported_ids: List[str] = []


class HotUpdateRequest(BaseModel):
	file: str
	content: str
	# ids of the modules the host already plans to invalidate
	modules: List[str]
	graph: List[ModulePayload]


class HotUpdateResponse(BaseModel):
	modules: Optional[List[str]] = None


def build_module_graph(nodes: List[ModulePayload]) -> Dict[str, ModuleNode]:
	graph: Dict[str, ModuleNode] = {}
	for node in nodes:
		if node.id:
			graph[node.id] = ModuleNode(id=node.id, file=node.file)
	for node in nodes:
		if node.id:
			graph[node.id].imported_modules = [graph[i] for i in node.imported_ids if i in graph]
	return graph


def create_app(options: Optional[SetupComponentOptions] = None) -> FastAPI:
	if options is None:
		root = os.environ.get("SETUP_COMPONENT_ROOT")
		options = SetupComponentOptions(root=root) if root else SetupComponentOptions()
	if not os.path.isdir(options.root):
		raise ValueError(f"Invalid root: {options.root}")

	app = FastAPI(title="Setup Component Compiler")
	plugin = SetupComponentPlugin(options)
	app.state.plugin = plugin

	@app.post("/transform", response_model=TransformResponse)
	def transform(req: TransformRequest) -> TransformResponse:
		try:
			result: Optional[TransformResult] = plugin.transform(req.code, req.id)
		except InvalidSetupComponentError as e:
			raise HTTPException(status_code=422, detail=str(e))
		if result is None:
			return TransformResponse()
		return TransformResponse(code=result.code, map=result.map)

	@app.post("/resolve", response_model=ResolveResponse)
	def resolve(req: IdRequest) -> ResolveResponse:
		return ResolveResponse(id=plugin.resolve_id(req.id))

	@app.post("/load", response_model=LoadResponse)
	def load(req: IdRequest) -> LoadResponse:
		return LoadResponse(code=plugin.load(req.id))

	@app.post("/hot-update", response_model=HotUpdateResponse)
	async def hot_update(req: HotUpdateRequest) -> HotUpdateResponse:
		graph = build_module_graph(req.graph)
		missing = [i for i in req.modules if i not in graph]
		if missing:
			raise HTTPException(status_code=400, detail=f"Modules missing from graph: {', '.join(missing)}")

		async def read() -> str:
			return req.content

		hmr = HotUpdateContext(file=req.file, modules=[graph[i] for i in req.modules], read=read)
		modules = await plugin.handle_hot_update(hmr)
		if modules is None:
			return HotUpdateResponse()
		return HotUpdateResponse(modules=[mod.id for mod in modules if mod.id])

	return app


setup_logging(os.environ.get("SETUP_COMPONENT_LOG_LEVEL", "INFO"))
app = create_app()
