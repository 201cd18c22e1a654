# Centralized rule and grammar configuration (no heavy imports here).

RULE_ID = "lazy-import-heavy-js-deps"

# Heavy JavaScript dependencies that should be lazily loaded
DEFAULT_HEAVY_DEPENDENCIES = (
    # build tools and bundlers
    "webpack", "rollup", "vite", "esbuild", "parcel",
    # testing frameworks
    "jest", "mocha", "jasmine", "cypress", "playwright",
    # transpilers and compilers
    "babel", "@babel/core", "typescript", "ts-node",
    # linters and formatters
    "eslint", "prettier", "jshint",
    # utility libraries
    "lodash", "moment", "axios", "request",
    # frameworks
    "react", "vue", "angular", "express",
    # development tools
    "nodemon", "pm2", "forever",
)

# Node type sets used by the tree-sitter-javascript grammar.
JS_NODESETS = {
    # "function" was renamed to "function_expression" in newer grammar releases
    "function": {
        "function_declaration", "function", "function_expression",
        "generator_function_declaration", "generator_function",
        "arrow_function",
    },
    "method": {"method_definition"},
    "import": {"import_statement"},
    "export": {"export_statement"},
    "return": {"return_statement"},
    "call": {"call_expression"},
    "string": {"string"},
    "ident": {"identifier"},
    "dynamic_import": {"import"},
    "skip": {"comment", "hash_bang_line"},
}

# Scope boundaries of the lowered tree: grammar function kinds plus the
# synthesized function value of a method definition.
FUNCTION_KINDS = frozenset(JS_NODESETS["function"] | {"function_expression"})

REQUIRE_IDENTIFIER = "require"

SCRIPT_EXTENSIONS = (".js", ".mjs")
SKIP_DIRECTORIES = {"node_modules"}

ENV_CONFIG_PATH = "DUSTY_CONFIG"
ENV_SEVERITY = "DUSTY_SEVERITY"
ENV_ADDITIONAL_HEAVY_DEPS = "DUSTY_ADDITIONAL_HEAVY_DEPS"
