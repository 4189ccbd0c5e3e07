"""Templates lifted from real projects that exercised edge cases of the engine."""

from refine import Instrumenter
from trace_helpers import marker_count, marker_lines


def test_alpine_handlers_on_multi_line_input(plain_only: Instrumenter) -> None:
    source = """<input
    @mouseenter="showInputTooltip($event)"
    @mouseleave="hideInputTooltip()"
    @mousemove="currentInputMouseEvent = $event; moveTooltip($event, inputTooltip, $event.currentTarget)"
    type="email"
    placeholder="john@email.com"
    class="placeholder:text-stone-300 text-foreground bg-background"
/>"""

    result = plain_only.instrument(source, "home.sections.hero")

    assert marker_count(result) == 1
    assert "@mouseenter=" in result
    assert "$event" in result


def test_component_with_bound_array_attribute(components_only: Instrumenter) -> None:
    source = """<x-carousel :items="[
    ['title' => 'Slide 1', 'image' => '/images/carousel/mountains.jpg'],
    ['title' => 'Slide 2', 'image' => '/images/carousel/forest.jpg'],
]" gap="md:gap-3" />"""

    assert components_only.instrument(source, "home.sections.hero") == source


def test_class_helper_in_php_attribute(plain_only: Instrumenter) -> None:
    source = """<div class="<?php echo \\Illuminate\\Support\\Arr::toCssClasses([
    'fixed top-0 w-[42px]',
    'right-px border-l' => $position === 'right',
    'left-px border-r' => $position === 'left',
]); ?>">"""

    assert plain_only.instrument(source, "home.dot-matrix") == source


def test_livewire_tag_is_not_a_target(instrumenter: Instrumenter) -> None:
    source = """<livewire:user-profile
    :user="$user"
    wire:key="profile-{{ $user->id }}"
/>"""

    assert instrumenter.instrument(source, "components.profile") == source


def test_complex_alpine_data_initialisation(plain_only: Instrumenter) -> None:
    source = """<div x-data="{
    hoveredInput: false,
    hoveredButton: false,
    initTooltips() {
        this.inputTooltip = this.$refs.inputTooltip;
        gsap.set(this.inputTooltip, { autoAlpha: 0 });
    }
}"
x-init="initTooltips()">"""

    result = plain_only.instrument(source, "test.view")

    assert marker_count(result) == 1
    assert "$refs" in result
    assert result.count("\n") == source.count("\n")


def test_foreach_body(plain_only: Instrumenter) -> None:
    source = """@foreach($items as $item)
    <div class="item">{{ $item->name }}</div>
@endforeach"""

    result = plain_only.instrument(source, "test.view")

    assert marker_lines(result) == [2]
    assert result.startswith("@foreach($items as $item)\n")


def test_if_else_branches(plain_only: Instrumenter) -> None:
    source = """@if($condition)
    <div class="success">Success!</div>
@else
    <div class="error">Error!</div>
@endif"""

    result = plain_only.instrument(source, "test.view")

    assert marker_lines(result) == [2, 4]


def test_named_slots(components_only: Instrumenter) -> None:
    source = """<x-card>
    <x-slot:header>
        <h2>Title</h2>
    </x-slot:header>

    <div class="content">
        Main content
    </div>
</x-card>"""

    result = components_only.instrument(source, "test.view")

    assert marker_lines(result) == [1, 2]
    assert "<h2>Title</h2>" in result


def test_javascript_in_attribute_survives(plain_only: Instrumenter) -> None:
    source = """<button
    @click="
        if (confirm('Are you sure?')) {
            deleteItem($event.target.dataset.id);
        }
    "
    type="button"
>
</button>"""

    result = plain_only.instrument(source, "test.view")

    assert marker_lines(result) == [1]
    assert "confirm('Are you sure?')" in result
    assert result.count("\n") == source.count("\n")


def test_many_components_in_one_file(components_only: Instrumenter) -> None:
    source = """<x-alert variant="success" />
<x-button class="primary">Click</x-button>
<x-card>
    <x-card.header>Header</x-card.header>
    <x-card.body>Body</x-card.body>
</x-card>"""

    result = components_only.instrument(source, "test.view")

    assert marker_lines(result) == [1, 2, 3, 4, 5]


def test_form_elements(plain_only: Instrumenter) -> None:
    source = """<form action="/submit" method="POST">
    <label for="email">Email</label>
    <input type="email" id="email" name="email" />

    <label for="message">Message</label>
    <textarea id="message" name="message"></textarea>

    <select name="country">
        <option value="us">United States</option>
    </select>

    <button type="submit">Submit</button>
</form>"""

    result = plain_only.instrument(source, "test.view")

    assert marker_lines(result) == [1, 2, 3, 5, 6, 8, 12]
    assert '<option value="us">' in result


def test_dropdown_item_with_conditional_attributes(plain_only: Instrumenter) -> None:
    source = """@if (filled($badge))
    @if ($badge instanceof \\Illuminate\\View\\ComponentSlot)
        {{ $badge }}
    @else
        <span
            @if ($badgeTooltip)
                x-tooltip="{
                    content: @js($badgeTooltip),
                    theme: $store.theme,
                    allowHTML: @js($badgeTooltip instanceof \\Illuminate\\Contracts\\Support\\Htmlable),
                }"
            @endif
            {{ (new ComponentAttributeBag)->color(BadgeComponent::class, $badgeColor)->class(['fi-badge']) }}
        >
            {{ $badge }}
        </span>
    @endif
@endif"""

    assert plain_only.instrument(source, "vendor.filament.components.dropdown.list.item") == source


def test_named_parameters_in_echo(instrumenter: Instrumenter) -> None:
    source = """@if ($icon)
    {{
        \\Filament\\Support\\generate_icon_html($icon, $iconAlias, (new ComponentAttributeBag([
            'wire:loading.remove.delay.' . config('filament.livewire_loading_delay', 'default') => $hasLoadingIndicator,
            'wire:target' => $hasLoadingIndicator ? $loadingIndicatorTarget : false,
        ]))->color(IconComponent::class, $iconColor), size: $iconSize)
    }}
@endif"""

    assert instrumenter.instrument(source, "vendor.filament.components.dropdown.list.item") == source


def test_attribute_bag_chain(plain_only: Instrumenter) -> None:
    source = """<div
    {{
        $attributes
            ->when(
                $tag === 'form',
                fn (ComponentAttributeBag $attributes) => $attributes->except(['action', 'class', 'method']),
            )
            ->merge([
                'aria-disabled' => $disabled ? 'true' : null,
                'disabled' => $disabled && blank($tooltip),
            ], escape: false)
            ->class([
                'fi-dropdown-list-item',
                'fi-disabled' => $disabled,
            ])
            ->color(ItemComponent::class, $color)
    }}
>"""

    assert plain_only.instrument(source, "vendor.filament.components.item") == source


def test_component_with_conditional_attributes(components_only: Instrumenter) -> None:
    source = """<x-button
    @if ($showIcon)
        icon="heroicon-o-check"
    @endif
    {{ $attributes }}
>
    Click me
</x-button>"""

    assert components_only.instrument(source, "components.button") == source


def test_simple_component(components_only: Instrumenter) -> None:
    source = '<x-button type="submit" class="btn-primary">Submit</x-button>'

    result = components_only.instrument(source, "components.form")

    assert marker_count(result) == 1


def test_component_with_echo_in_quotes(components_only: Instrumenter) -> None:
    source = '<x-button type="{{ $type }}" class="{{ $class }}">{{ $label }}</x-button>'

    result = components_only.instrument(source, "components.form")

    assert marker_count(result) == 1
    assert result.endswith('>{{ $label }}</x-button>')
