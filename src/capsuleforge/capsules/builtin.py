"""
Built-in capsules: button, text, card, image, video.

Templates use ``{{componentName}}`` for the generated type name. Video has
no native templates and is reported as unsupported on ios/android.
"""

from __future__ import annotations

from ..core.ir import CapsuleDefinition, CapsuleProp, PlatformTemplate

# =============================================================================
# Button
# =============================================================================

_BUTTON_WEB = """interface {{componentName}}Props {
  text: string
  variant?: 'primary' | 'secondary' | 'outline'
  disabled?: boolean
  onPress?: () => void
}

export function {{componentName}}({ text, variant = 'primary', disabled = false, onPress }: {{componentName}}Props) {
  const styles = {
    primary: 'bg-primary text-white',
    secondary: 'bg-secondary text-white',
    outline: 'border border-primary text-primary',
  }
  return (
    <button
      className={`px-4 py-2 rounded shadow ${styles[variant]} disabled:opacity-50`}
      disabled={disabled}
      onClick={onPress}
    >
      {text}
    </button>
  )
}
"""

_BUTTON_IOS = """struct {{componentName}}: View {
    let text: String
    var variant: String = "primary"
    var disabled: Bool = false
    var onPress: () -> Void = {}

    var body: some View {
        Button(action: onPress) {
            Text(text)
                .padding(.horizontal, 16)
                .padding(.vertical, 8)
                .foregroundColor(variant == "outline" ? .appPrimary : .white)
                .background(variant == "outline" ? Color.clear : Color.appPrimary)
                .cornerRadius(AppMetrics.cornerRadius)
        }
        .disabled(disabled)
    }
}
"""

_BUTTON_ANDROID = """@Composable
fun {{componentName}}(
    text: String,
    variant: String = "primary",
    disabled: Boolean = false,
    onPress: () -> Unit = {},
) {
    if (variant == "outline") {
        OutlinedButton(onClick = onPress, enabled = !disabled) { Text(text) }
    } else {
        Button(
            onClick = onPress,
            enabled = !disabled,
            shape = RoundedCornerShape(AppDimens.CornerRadius),
            colors = ButtonDefaults.buttonColors(containerColor = AppColors.Primary),
        ) { Text(text) }
    }
}
"""

_ANDROID_BUTTON_IMPORTS = [
    "import androidx.compose.foundation.shape.RoundedCornerShape",
    "import androidx.compose.material3.Button",
    "import androidx.compose.material3.ButtonDefaults",
    "import androidx.compose.material3.OutlinedButton",
    "import androidx.compose.material3.Text",
    "import androidx.compose.runtime.Composable",
]

BUTTON = CapsuleDefinition(
    id="button",
    name="Button",
    description="Pressable button with text",
    category="ui",
    tags=["action", "input"],
    props=[
        CapsuleProp(name="text", required=True),
        CapsuleProp(name="variant", type="select", options=["primary", "secondary", "outline"], default="primary"),
        CapsuleProp(name="disabled", type="boolean", default=False),
        CapsuleProp(name="onPress", type="action", required=True),
    ],
    platforms={
        "web": PlatformTemplate(framework="react", code=_BUTTON_WEB),
        "desktop": PlatformTemplate(framework="tauri", code=_BUTTON_WEB),
        "ios": PlatformTemplate(framework="swiftui", code=_BUTTON_IOS, imports=["import SwiftUI"]),
        "android": PlatformTemplate(
            framework="compose", code=_BUTTON_ANDROID, imports=_ANDROID_BUTTON_IMPORTS
        ),
    },
)

# =============================================================================
# Text
# =============================================================================

_TEXT_WEB = """interface {{componentName}}Props {
  content: string
  variant?: 'body' | 'heading' | 'caption'
}

export function {{componentName}}({ content, variant = 'body' }: {{componentName}}Props) {
  if (variant === 'heading') {
    return <h2 className="text-2xl font-heading font-semibold">{content}</h2>
  }
  const tone = variant === 'caption' ? 'text-sm text-text-secondary' : 'text-base'
  return <p className={tone}>{content}</p>
}
"""

_TEXT_IOS = """struct {{componentName}}: View {
    let content: String
    var variant: String = "body"

    var body: some View {
        Text(content)
            .font(variant == "heading" ? .title2.bold() : variant == "caption" ? .caption : .body)
            .foregroundColor(variant == "caption" ? .appTextSecondary : .appTextPrimary)
    }
}
"""

_TEXT_ANDROID = """@Composable
fun {{componentName}}(content: String, variant: String = "body") {
    val style = when (variant) {
        "heading" -> MaterialTheme.typography.headlineSmall
        "caption" -> MaterialTheme.typography.bodySmall
        else -> MaterialTheme.typography.bodyLarge
    }
    Text(text = content, style = style, color = AppColors.TextPrimary)
}
"""

TEXT = CapsuleDefinition(
    id="text",
    name="Text",
    description="Body, heading or caption text",
    category="ui",
    tags=["typography"],
    props=[
        CapsuleProp(name="content", required=True),
        CapsuleProp(name="variant", type="select", options=["body", "heading", "caption"], default="body"),
    ],
    platforms={
        "web": PlatformTemplate(framework="react", code=_TEXT_WEB),
        "desktop": PlatformTemplate(framework="tauri", code=_TEXT_WEB),
        "ios": PlatformTemplate(framework="swiftui", code=_TEXT_IOS, imports=["import SwiftUI"]),
        "android": PlatformTemplate(
            framework="compose",
            code=_TEXT_ANDROID,
            imports=[
                "import androidx.compose.material3.MaterialTheme",
                "import androidx.compose.material3.Text",
                "import androidx.compose.runtime.Composable",
            ],
        ),
    },
)

# =============================================================================
# Card (container with children and a footer slot)
# =============================================================================

_CARD_WEB = """import type { ReactNode } from 'react'

interface {{componentName}}Props {
  title?: string
  children?: ReactNode
  footer?: ReactNode
}

export function {{componentName}}({ title, children, footer }: {{componentName}}Props) {
  return (
    <section className="bg-surface rounded shadow p-6 space-y-4">
      {title && <h3 className="text-lg font-heading font-semibold">{title}</h3>}
      <div className="space-y-3">{children}</div>
      {footer && <footer className="pt-4 border-t">{footer}</footer>}
    </section>
  )
}
"""

_CARD_IOS = """struct {{componentName}}<Content: View, Footer: View>: View {
    var title: String? = nil
    @ViewBuilder var footer: () -> Footer
    @ViewBuilder var content: () -> Content

    init(
        title: String? = nil,
        @ViewBuilder footer: @escaping () -> Footer = { EmptyView() },
        @ViewBuilder content: @escaping () -> Content = { EmptyView() }
    ) {
        self.title = title
        self.footer = footer
        self.content = content
    }

    var body: some View {
        VStack(alignment: .leading, spacing: 12 * AppMetrics.spacingScale) {
            if let title {
                Text(title).font(.headline)
            }
            content()
            footer()
        }
        .padding()
        .background(Color.appSurface)
        .cornerRadius(AppMetrics.cornerRadius)
    }
}
"""

_CARD_ANDROID = """@Composable
fun {{componentName}}(
    title: String? = null,
    footer: @Composable () -> Unit = {},
    content: @Composable ColumnScope.() -> Unit = {},
) {
    Card(
        shape = RoundedCornerShape(AppDimens.CornerRadius),
        colors = CardDefaults.cardColors(containerColor = AppColors.Surface),
    ) {
        Column(modifier = Modifier.padding(16.dp)) {
            if (title != null) {
                Text(text = title, style = MaterialTheme.typography.titleMedium)
            }
            content()
            footer()
        }
    }
}
"""

CARD = CapsuleDefinition(
    id="card",
    name="Card",
    description="Surface container with an optional title and footer",
    category="layout",
    tags=["container", "layout"],
    props=[CapsuleProp(name="title")],
    accepts_children=True,
    slots=["footer"],
    platforms={
        "web": PlatformTemplate(framework="react", code=_CARD_WEB),
        "desktop": PlatformTemplate(framework="tauri", code=_CARD_WEB),
        "ios": PlatformTemplate(framework="swiftui", code=_CARD_IOS, imports=["import SwiftUI"]),
        "android": PlatformTemplate(
            framework="compose",
            code=_CARD_ANDROID,
            imports=[
                "import androidx.compose.foundation.layout.Column",
                "import androidx.compose.foundation.layout.ColumnScope",
                "import androidx.compose.foundation.layout.padding",
                "import androidx.compose.foundation.shape.RoundedCornerShape",
                "import androidx.compose.material3.Card",
                "import androidx.compose.material3.CardDefaults",
                "import androidx.compose.material3.MaterialTheme",
                "import androidx.compose.material3.Text",
                "import androidx.compose.runtime.Composable",
                "import androidx.compose.ui.Modifier",
                "import androidx.compose.ui.unit.dp",
            ],
        ),
    },
)

# =============================================================================
# Image
# =============================================================================

_IMAGE_WEB = """interface {{componentName}}Props {
  src: string
  alt?: string
}

export function {{componentName}}({ src, alt = '' }: {{componentName}}Props) {
  return <img src={src} alt={alt} className="w-full rounded object-cover" />
}
"""

_IMAGE_IOS = """struct {{componentName}}: View {
    let src: String
    var alt: String = ""

    var body: some View {
        AsyncImage(url: URL(string: src)) { image in
            image.resizable().scaledToFill()
        } placeholder: {
            ProgressView()
        }
        .accessibilityLabel(alt)
        .cornerRadius(AppMetrics.cornerRadius)
    }
}
"""

_IMAGE_ANDROID = """@Composable
fun {{componentName}}(src: String, alt: String = "") {
    AsyncImage(
        model = src,
        contentDescription = alt,
        contentScale = ContentScale.Crop,
        modifier = Modifier.fillMaxWidth(),
    )
}
"""

IMAGE = CapsuleDefinition(
    id="image",
    name="Image",
    description="Remote image",
    category="media",
    tags=["media"],
    props=[CapsuleProp(name="src", required=True), CapsuleProp(name="alt")],
    platforms={
        "web": PlatformTemplate(framework="react", code=_IMAGE_WEB),
        "desktop": PlatformTemplate(framework="tauri", code=_IMAGE_WEB),
        "ios": PlatformTemplate(
            framework="swiftui", code=_IMAGE_IOS, imports=["import SwiftUI"], min_version="15.0"
        ),
        "android": PlatformTemplate(
            framework="compose",
            code=_IMAGE_ANDROID,
            dependencies=["io.coil-kt:coil-compose:2.5.0"],
            imports=[
                "import androidx.compose.foundation.layout.fillMaxWidth",
                "import androidx.compose.runtime.Composable",
                "import androidx.compose.ui.Modifier",
                "import androidx.compose.ui.layout.ContentScale",
                "import coil.compose.AsyncImage",
            ],
            min_sdk=21,
        ),
    },
)

# =============================================================================
# Video (web and desktop only)
# =============================================================================

_VIDEO_WEB = """import ReactPlayer from 'react-player'

interface {{componentName}}Props {
  src: string
  autoplay?: boolean
}

export function {{componentName}}({ src, autoplay = false }: {{componentName}}Props) {
  return <ReactPlayer url={src} playing={autoplay} controls width="100%" />
}
"""

VIDEO = CapsuleDefinition(
    id="video",
    name="Video",
    description="Embedded video player",
    category="media",
    tags=["media"],
    props=[
        CapsuleProp(name="src", required=True),
        CapsuleProp(name="autoplay", type="boolean", default=False),
    ],
    platforms={
        "web": PlatformTemplate(framework="react", code=_VIDEO_WEB, dependencies=["react-player:^2.13.0"]),
        "desktop": PlatformTemplate(framework="tauri", code=_VIDEO_WEB, dependencies=["react-player:^2.13.0"]),
    },
)


def get_builtin_capsules() -> list[CapsuleDefinition]:
    """
    Get all built-in capsule definitions.

    Returns:
        Definitions in registration order
    """
    return [BUTTON, TEXT, CARD, IMAGE, VIDEO]
