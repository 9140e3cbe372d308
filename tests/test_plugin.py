import asyncio

from setup_component.model import HotUpdateContext, ModuleNode, SetupComponentOptions
from setup_component.plugin import SetupComponentPlugin


CODE = "import { h } from 'vue'\nexport default defineSetupComponent(() => { return h('b') })\n"


def test_filter_selects_script_modules():
	plugin = SetupComponentPlugin(SetupComponentOptions(root="/p"))
	assert plugin.should_transform("/p/src/a.ts")
	assert plugin.should_transform("/p/src/a.mjs")
	assert not plugin.should_transform("/p/src/App.vue")
	assert not plugin.should_transform("/p/node_modules/lib/index.js")
	assert not plugin.should_transform("/p/src/a.ts__setup_component_0.vue")


def test_hooks_round_trip():
	plugin = SetupComponentPlugin(SetupComponentOptions(root="/p"))
	result = plugin.transform(CODE, "/p/src/a.ts")
	virtual_id = "/p/src/a.ts__setup_component_0.vue"
	assert f"from '{virtual_id}'" in result.code

	assert plugin.resolve_id(virtual_id) == virtual_id
	assert plugin.resolve_id("/p/src/a.ts") is None

	sfc = plugin.load(virtual_id)
	assert "import { h } from 'vue'\n" in sfc
	assert "defineRender(h('b'));" in sfc
	assert plugin.load("/p/src/a.ts") is None


def test_excluded_module_is_left_alone():
	plugin = SetupComponentPlugin(SetupComponentOptions(root="/p", exclude=[r"/legacy/"]))
	assert plugin.transform(CODE, "/p/legacy/a.ts") is None
	assert len(plugin.ctx) == 0


def test_custom_names():
	options = SetupComponentOptions(root="/p", factory_name="component", render_call="render")
	plugin = SetupComponentPlugin(options)
	plugin.transform("export default component(() => { return 1 })\n", "/p/a.ts")
	assert "render(1);" in plugin.load("/p/a.ts__setup_component_0.vue")


def test_handle_hot_update_uses_root():
	plugin = SetupComponentPlugin(SetupComponentOptions(root="/p"))
	plugin.transform(CODE, "/p/src/a.ts")
	original = ModuleNode(id="/p/src/a.ts", file="/p/src/a.ts")
	original.imported_modules = [ModuleNode(id="/src/a.ts__setup_component_0.vue")]

	async def read():
		return CODE

	modules = asyncio.run(plugin.handle_hot_update(HotUpdateContext(file="/p/src/a.ts", modules=[original], read=read)))
	assert [mod.id for mod in modules] == ["/p/src/a.ts", "/src/a.ts__setup_component_0.vue"]
