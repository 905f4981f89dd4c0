import re

# Names provided by the default TypeScript libraries (ES, DOM, Node typings)
# that a file may use without declaring or importing them.
GLOBAL_NAMES = frozenset(
    """
    undefined NaN Infinity arguments globalThis eval isNaN isFinite parseFloat
    parseInt decodeURI decodeURIComponent encodeURI encodeURIComponent escape
    unescape Object Function Array String Number Boolean Symbol BigInt Date
    RegExp Error EvalError RangeError ReferenceError SyntaxError TypeError
    URIError AggregateError Math JSON Reflect Proxy Promise Map Set WeakMap
    WeakSet WeakRef FinalizationRegistry ArrayBuffer SharedArrayBuffer DataView
    Atomics Int8Array Uint8Array Uint8ClampedArray Int16Array Uint16Array
    Int32Array Uint32Array Float32Array Float64Array BigInt64Array
    BigUint64Array Intl Iterator AsyncIterator Generator AsyncGenerator
    GeneratorFunction AsyncGeneratorFunction

    Partial Required Readonly Record Pick Omit Exclude Extract NonNullable
    Parameters ConstructorParameters ReturnType InstanceType ThisParameterType
    OmitThisParameter ThisType Awaited Uppercase Lowercase Capitalize
    Uncapitalize NoInfer PromiseLike PromiseConstructor ArrayLike ReadonlyArray
    ReadonlyMap ReadonlySet Iterable IterableIterator AsyncIterable
    AsyncIterableIterator IteratorResult PropertyKey PropertyDescriptor
    TemplateStringsArray CallableFunction NewableFunction IArguments
    ArrayBufferLike ArrayBufferView TypedPropertyDescriptor ClassDecorator
    PropertyDecorator MethodDecorator ParameterDecorator ObjectConstructor
    ArrayConstructor ErrorConstructor RegExpMatchArray RegExpExecArray
    WeakKey Disposable AsyncDisposable

    console setTimeout clearTimeout setInterval clearInterval setImmediate
    clearImmediate queueMicrotask structuredClone fetch Request Response
    Headers RequestInit ResponseInit URL URLSearchParams AbortController
    AbortSignal TextEncoder TextDecoder Blob File FileReader FormData
    ReadableStream WritableStream TransformStream WebSocket Event EventTarget
    CustomEvent MessageChannel MessagePort MessageEvent BroadcastChannel
    Worker performance crypto atob btoa

    window self document navigator location history localStorage
    sessionStorage alert confirm prompt requestAnimationFrame
    cancelAnimationFrame getComputedStyle matchMedia Node Element
    HTMLElement HTMLDivElement HTMLInputElement HTMLButtonElement
    HTMLFormElement HTMLAnchorElement HTMLImageElement HTMLCanvasElement
    HTMLSelectElement HTMLTextAreaElement SVGElement Document DocumentFragment
    NodeList HTMLCollection Window MouseEvent KeyboardEvent FocusEvent
    InputEvent PointerEvent TouchEvent DragEvent ErrorEvent ProgressEvent
    MutationObserver IntersectionObserver ResizeObserver XMLHttpRequest Image
    Audio CSSStyleDeclaration DOMParser Storage DOMRect DOMTokenList ShadowRoot
    Selection Range Text Comment Attr ClipboardEvent WheelEvent AnimationEvent
    TransitionEvent SubmitEvent StorageEvent CloseEvent BeforeUnloadEvent
    EventListener EventListenerOrEventListenerObject AddEventListenerOptions
    EventInit ScrollBehavior ScrollToOptions ImageData ImageBitmap Path2D
    CanvasRenderingContext2D WebGLRenderingContext WebGL2RenderingContext
    OffscreenCanvas MediaQueryList MediaStream Notification IDBDatabase
    indexedDB caches Cache ServiceWorker FileList DataTransfer Screen screen

    process require module exports __dirname __filename Buffer global NodeJS
    JSX
    """.split()
)

# lib.dom declares an interface and a constructor per element tag.
DOM_ELEMENT_NAME = re.compile(r"^(HTML|SVG)[A-Za-z]*Element$")


def is_global_name(name: str) -> bool:
    return name in GLOBAL_NAMES or DOM_ELEMENT_NAME.match(name) is not None
