"""Reference HLSL word tables and the shader file-extension set."""

from __future__ import annotations

from pathlib import PurePath

from hlslex.tokens import Category

# Filenames a host should route to this lexer
FILE_EXTENSIONS: tuple[str, ...] = (".fx", ".fxc", ".fxh", ".hlsl", ".shader", ".cginc", ".compute")

SCALAR_TYPES: tuple[str, ...] = (
    "bool",
    "dword",
    "int",
    "uint",
    "half",
    "float",
    "double",
    "min16float",
    "min10float",
    "min16int",
    "min12int",
    "min16uint",
)


def expand_scalar_types(bases: tuple[str, ...] = SCALAR_TYPES) -> tuple[str, ...]:
    """Return each scalar name with its vector (``float3``) and matrix (``float3x4``) forms."""
    words: list[str] = []
    for base in bases:
        words.append(base)
        words.extend(f"{base}{n}" for n in range(1, 5))
        words.extend(f"{base}{r}x{c}" for r in range(1, 5) for c in range(1, 5))
    return tuple(words)


OBJECT_TYPES: tuple[str, ...] = (
    "AppendStructuredBuffer",
    "BlendState",
    "Buffer",
    "ByteAddressBuffer",
    "ConsumeStructuredBuffer",
    "DepthStencilState",
    "DepthStencilView",
    "InputPatch",
    "LineStream",
    "OutputPatch",
    "PointStream",
    "RasterizerState",
    "RenderTargetView",
    "RWBuffer",
    "RWByteAddressBuffer",
    "RWStructuredBuffer",
    "RWTexture1D",
    "RWTexture1DArray",
    "RWTexture2D",
    "RWTexture2DArray",
    "RWTexture3D",
    "SamplerComparisonState",
    "SamplerState",
    "StructuredBuffer",
    "Texture1D",
    "Texture1DArray",
    "Texture2D",
    "Texture2DArray",
    "Texture2DMS",
    "Texture2DMSArray",
    "Texture3D",
    "TextureCube",
    "TextureCubeArray",
    "TriangleStream",
    "cbuffer",
    "class",
    "interface",
    "matrix",
    "sampler",
    "sampler1D",
    "sampler2D",
    "sampler3D",
    "samplerCUBE",
    "sampler_state",
    "string",
    "struct",
    "tbuffer",
    "texture",
    "texture1D",
    "texture2D",
    "texture3D",
    "textureCUBE",
    "vector",
    "void",
)

QUALIFIERS: tuple[str, ...] = (
    "centroid",
    "column_major",
    "const",
    "extern",
    "globallycoherent",
    "groupshared",
    "in",
    "inline",
    "inout",
    "line",
    "lineadj",
    "linear",
    "nointerpolation",
    "noperspective",
    "out",
    "point",
    "precise",
    "row_major",
    "sample",
    "shared",
    "snorm",
    "static",
    "triangle",
    "triangleadj",
    "uniform",
    "unorm",
    "volatile",
)

# Control flow, effect-framework words and shader semantics
KEYWORDS: tuple[str, ...] = (
    "asm",
    "asm_fragment",
    "break",
    "case",
    "compile",
    "compile_fragment",
    "continue",
    "default",
    "discard",
    "do",
    "else",
    "false",
    "for",
    "fxgroup",
    "if",
    "namespace",
    "packoffset",
    "pass",
    "pixelfragment",
    "register",
    "return",
    "stateblock",
    "stateblock_state",
    "switch",
    "technique",
    "technique10",
    "technique11",
    "true",
    "typedef",
    "vertexfragment",
    "while",
    # System-value semantics
    "SV_ClipDistance[0-9]?",
    "SV_Coverage",
    "SV_CullDistance[0-9]?",
    "SV_Depth",
    "SV_DepthGreaterEqual",
    "SV_DepthLessEqual",
    "SV_DispatchThreadID",
    "SV_DomainLocation",
    "SV_GroupID",
    "SV_GroupIndex",
    "SV_GroupThreadID",
    "SV_GSInstanceID",
    "SV_InnerCoverage",
    "SV_InsideTessFactor",
    "SV_InstanceID",
    "SV_IsFrontFace",
    "SV_OutputControlPointID",
    "SV_Position",
    "SV_PrimitiveID",
    "SV_RenderTargetArrayIndex",
    "SV_SampleIndex",
    "SV_StencilRef",
    "SV_Target[0-7]?",
    "SV_TessFactor",
    "SV_VertexID",
    "SV_ViewportArrayIndex",
    # Legacy semantics
    "BINORMAL[0-9]?",
    "BLENDINDICES[0-9]?",
    "BLENDWEIGHT[0-9]?",
    "COLOR[0-9]?",
    "DEPTH[0-9]?",
    "FOG",
    "NORMAL[0-9]?",
    "POSITION[0-9]?",
    "POSITIONT",
    "PSIZE[0-9]?",
    "TANGENT[0-9]?",
    "TESSFACTOR[0-9]?",
    "TEXCOORD[0-9]?",
    "VFACE",
    "VPOS",
)

RESERVED_KEYWORDS: tuple[str, ...] = (
    "auto",
    "catch",
    "char",
    "const_cast",
    "delete",
    "dynamic_cast",
    "enum",
    "explicit",
    "friend",
    "goto",
    "long",
    "mutable",
    "new",
    "operator",
    "private",
    "protected",
    "public",
    "reinterpret_cast",
    "short",
    "signed",
    "sizeof",
    "static_cast",
    "template",
    "this",
    "throw",
    "try",
    "typename",
    "union",
    "unsigned",
    "using",
    "virtual",
)

BUILTINS: tuple[str, ...] = (
    # Intrinsic functions
    "abort",
    "abs",
    "acos",
    "all",
    "AllMemoryBarrier",
    "AllMemoryBarrierWithGroupSync",
    "any",
    "asdouble",
    "asfloat",
    "asin",
    "asint",
    "asuint",
    "atan",
    "atan2",
    "ceil",
    "CheckAccessFullyMapped",
    "clamp",
    "clip",
    "cos",
    "cosh",
    "countbits",
    "cross",
    "D3DCOLORtoUBYTE4",
    "ddx",
    "ddx_coarse",
    "ddx_fine",
    "ddy",
    "ddy_coarse",
    "ddy_fine",
    "degrees",
    "determinant",
    "DeviceMemoryBarrier",
    "DeviceMemoryBarrierWithGroupSync",
    "distance",
    "dot",
    "dst",
    "errorf",
    "EvaluateAttributeAtCentroid",
    "EvaluateAttributeAtSample",
    "EvaluateAttributeSnapped",
    "exp",
    "exp2",
    "f16tof32",
    "f32tof16",
    "faceforward",
    "firstbithigh",
    "firstbitlow",
    "floor",
    "fma",
    "fmod",
    "frac",
    "frexp",
    "fwidth",
    "GetRenderTargetSampleCount",
    "GetRenderTargetSamplePosition",
    "GroupMemoryBarrier",
    "GroupMemoryBarrierWithGroupSync",
    "InterlockedAdd",
    "InterlockedAnd",
    "InterlockedCompareExchange",
    "InterlockedCompareStore",
    "InterlockedExchange",
    "InterlockedMax",
    "InterlockedMin",
    "InterlockedOr",
    "InterlockedXor",
    "isfinite",
    "isinf",
    "isnan",
    "ldexp",
    "length",
    "lerp",
    "lit",
    "log",
    "log10",
    "log2",
    "mad",
    "max",
    "min",
    "modf",
    "msad4",
    "mul",
    "noise",
    "normalize",
    "pow",
    "printf",
    "Process2DQuadTessFactorsAvg",
    "Process2DQuadTessFactorsMax",
    "Process2DQuadTessFactorsMin",
    "ProcessIsolineTessFactors",
    "ProcessQuadTessFactorsAvg",
    "ProcessQuadTessFactorsMax",
    "ProcessQuadTessFactorsMin",
    "ProcessTriTessFactorsAvg",
    "ProcessTriTessFactorsMax",
    "ProcessTriTessFactorsMin",
    "radians",
    "rcp",
    "reflect",
    "refract",
    "reversebits",
    "round",
    "rsqrt",
    "saturate",
    "sign",
    "sin",
    "sincos",
    "sinh",
    "smoothstep",
    "sqrt",
    "step",
    "tan",
    "tanh",
    "tex1D",
    "tex1Dbias",
    "tex1Dgrad",
    "tex1Dlod",
    "tex1Dproj",
    "tex2D",
    "tex2Dbias",
    "tex2Dgrad",
    "tex2Dlod",
    "tex2Dproj",
    "tex3D",
    "tex3Dbias",
    "tex3Dgrad",
    "tex3Dlod",
    "tex3Dproj",
    "texCUBE",
    "texCUBEbias",
    "texCUBEgrad",
    "texCUBElod",
    "texCUBEproj",
    "transpose",
    "trunc",
    # Object methods
    "Append",
    "CalculateLevelOfDetail",
    "CalculateLevelOfDetailUnclamped",
    "Consume",
    "DecrementCounter",
    "Gather",
    "GatherAlpha",
    "GatherBlue",
    "GatherCmp",
    "GatherCmpAlpha",
    "GatherCmpBlue",
    "GatherCmpGreen",
    "GatherCmpRed",
    "GatherGreen",
    "GatherRed",
    "GetDimensions",
    "GetSamplePosition",
    "IncrementCounter",
    "Load[234]?",
    "RestartStrip",
    "Sample",
    "SampleBias",
    "SampleCmp",
    "SampleCmpLevelZero",
    "SampleGrad",
    "SampleLevel",
    "Store[234]?",
)

PREPROCESSOR_DIRECTIVES: tuple[str, ...] = (
    "define",
    "elif",
    "else",
    "endif",
    "error",
    "if",
    "ifdef",
    "ifndef",
    "include",
    "line",
    "pragma",
    "undef",
)

PREPROCESSOR_BUILTINS: tuple[str, ...] = (
    "__COUNTER__",
    "__DATE__",
    "__FILE__",
    "__LINE__",
    "__TIME__",
)

PREPROCESSOR_OPERATORS: tuple[str, ...] = ("defined",)

BASE_WORDS: dict[Category, tuple[str, ...]] = {
    Category.TYPE: expand_scalar_types() + OBJECT_TYPES,
    Category.QUALIFIER: QUALIFIERS,
    Category.KEYWORD: KEYWORDS,
    Category.RESERVED_KEYWORD: RESERVED_KEYWORDS,
    Category.BUILTIN: BUILTINS,
    # No deprecated HLSL forms are tracked; kept so hosts can extend them
    Category.DEPRECATED_QUALIFIER: (),
    Category.DEPRECATED_KEYWORD: (),
    Category.DEPRECATED_BUILTIN: (),
    Category.DEPRECATED_VARIABLE: (),
    Category.PREPROCESSOR_DIRECTIVE: PREPROCESSOR_DIRECTIVES,
    Category.PREPROCESSOR_BUILTIN: PREPROCESSOR_BUILTINS,
    Category.PREPROCESSOR_OPERATOR: PREPROCESSOR_OPERATORS,
}


def is_shader_file(path: str | PurePath) -> bool:
    """Return True if path has one of the shader file extensions."""
    return PurePath(path).suffix.lower() in FILE_EXTENSIONS
